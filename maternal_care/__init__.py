"""Maternal care backend: gestational tracking and medical reminder delivery."""

__version__ = "0.1.0"
