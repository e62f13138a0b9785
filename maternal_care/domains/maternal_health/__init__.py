"""
Maternal Health Domain

Gestational age tracking, the medical reminder schedule and the
reminder delivery pipeline (matching, deduplication, queueing and dispatch).
"""
