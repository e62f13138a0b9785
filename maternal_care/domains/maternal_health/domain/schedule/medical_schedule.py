"""Medical Schedule Table.

Immutable table of medically timed reminder rules, based on WHO and Rwanda
MOH guidelines. The table is built once at import; changing the schedule is a
data edit here, never a logic change elsewhere.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from ..value_objects.language import Language
from ..value_objects.reminder_priority import ReminderPriority
from ..value_objects.reminder_type import ReminderType
from ..value_objects.schedule_track import ScheduleTrack


@dataclass(frozen=True)
class MessageTemplate:
    """Localized reminder text with `{name}` and `{week}` placeholders."""

    title: str
    body: str
    action_required: str = ""

    def render(self, name: str, week: int) -> str:
        return self.body.replace("{name}", name).replace("{week}", str(week))


@dataclass(frozen=True)
class ReminderRule:
    """One entry of the medical schedule."""

    key: str
    track: ScheduleTrack
    week_start: int
    week_end: int
    type: ReminderType
    priority: ReminderPriority
    templates: Mapping[Language, MessageTemplate] = field(compare=False)

    def __post_init__(self):
        if self.week_start < 0:
            raise ValueError(f"Rule {self.key}: week_start cannot be negative")
        if self.week_start > self.week_end:
            raise ValueError(f"Rule {self.key}: week_start must not exceed week_end")
        if Language.EN not in self.templates:
            raise ValueError(f"Rule {self.key}: an English template is required")
        object.__setattr__(self, "templates", MappingProxyType(dict(self.templates)))

    def covers(self, week: int) -> bool:
        return self.week_start <= week <= self.week_end

    def template_for(self, language: Language) -> MessageTemplate:
        """Template for the language, English when it has no translation."""
        return self.templates.get(language) or self.templates[Language.EN]

    def render(self, language: Language, name: str, week: int) -> str:
        return self.template_for(language).render(name=name, week=week)


def _rule(
    key: str,
    track: ScheduleTrack,
    weeks: tuple[int, int],
    type_: ReminderType,
    priority: ReminderPriority,
    templates: dict[Language, MessageTemplate],
) -> ReminderRule:
    return ReminderRule(
        key=key,
        track=track,
        week_start=weeks[0],
        week_end=weeks[1],
        type=type_,
        priority=priority,
        templates=templates,
    )


# ============================================================================
# ANTENATAL CARE VISITS
# ============================================================================

_ANTENATAL_RULES = (
    _rule(
        "anc_1",
        ScheduleTrack.ANTENATAL,
        (6, 8),
        ReminderType.ANC,
        ReminderPriority.HIGH,
        {
            Language.EN: MessageTemplate(
                "ANC 1 Visit Due",
                "Hello {name}! You're in week {week} of pregnancy. It's time for your first ANC visit "
                "to confirm pregnancy and start essential care.",
                "Visit the health center for pregnancy confirmation, HIV test, blood pressure check "
                "and folic acid supplements",
            ),
            Language.FR: MessageTemplate(
                "Visite ANC 1 Due",
                "Bonjour {name}! Vous êtes à la semaine {week} de grossesse. Il est temps pour votre "
                "première visite ANC pour confirmer la grossesse.",
                "Visitez le centre de santé pour confirmation de grossesse, test VIH, tension "
                "artérielle et suppléments d'acide folique",
            ),
            Language.RW: MessageTemplate(
                "ANC 1 Yageze",
                "Mwaramutse {name}! Muri mu cyumweru {week} cy'inda. Ni igihe cyo kujya kwa muganga "
                "bwa mbere (ANC 1) kugira ngo hamenyekane uko mutwite.",
                "Jya ku kigo nderabuzima kugira ngo hamenyekane ko utwite, gupimwa HIV, umuvuduko "
                "w'amaraso no gufata folic acid",
            ),
        },
    ),
    _rule(
        "anc_2",
        ScheduleTrack.ANTENATAL,
        (13, 16),
        ReminderType.ANC,
        ReminderPriority.HIGH,
        {
            Language.EN: MessageTemplate(
                "ANC 2 Visit Due",
                "Hello {name}! Week {week} - Time for ANC 2. Let's check baby's growth and get your "
                "tetanus vaccination.",
                "Second ANC visit for baby growth monitoring, tetanus shot (TT1) and blood pressure check",
            ),
            Language.FR: MessageTemplate(
                "Visite ANC 2 Due",
                "Bonjour {name}! Semaine {week} - Temps pour ANC 2. Vérifions la croissance du bébé "
                "et votre vaccination antitétanique.",
                "Deuxième visite ANC pour surveillance croissance bébé, vaccin tétanos (TT1), tension artérielle",
            ),
            Language.RW: MessageTemplate(
                "ANC 2 Yageze",
                "Mwaramutse {name}! Icyumweru {week} - Ni igihe cya ANC 2. Dufate urukingo rwa tetanus "
                "tugasuzuma uko umwana akura.",
                "ANC ya 2 yo kureba imikurire y'umwana, inkingo za tetanus (TT1), gupimwa umuvuduko w'amaraso",
            ),
        },
    ),
    _rule(
        "anc_3",
        ScheduleTrack.ANTENATAL,
        (20, 24),
        ReminderType.ANC,
        ReminderPriority.HIGH,
        {
            Language.EN: MessageTemplate(
                "ANC 3 Visit Due",
                "Hello {name}! Week {week} - ANC 3 time! Important check for pre-eclampsia signs and "
                "continued monitoring.",
                "Third ANC visit for pre-eclampsia screening, continued supplements and health monitoring",
            ),
            Language.FR: MessageTemplate(
                "Visite ANC 3 Due",
                "Bonjour {name}! Semaine {week} - Temps ANC 3! Vérification importante des signes de pré-éclampsie.",
                "Troisième visite ANC pour dépistage pré-éclampsie, suppléments continus, surveillance santé",
            ),
            Language.RW: MessageTemplate(
                "ANC 3 Yageze",
                "Mwaramutse {name}! Icyumweru {week} - Ni igihe cya ANC 3! Birashoboka kubona ibimenyetso "
                "by'eclampsia.",
                "ANC ya 3 yo kureba ibimenyetso by'indwara (eclampsia), gukomeza gufata imiti y'inyongera",
            ),
        },
    ),
    _rule(
        "anc_4",
        ScheduleTrack.ANTENATAL,
        (28, 32),
        ReminderType.ANC,
        ReminderPriority.HIGH,
        {
            Language.EN: MessageTemplate(
                "ANC 4 Visit Due",
                "Hello {name}! Week {week} - ANC 4 appointment. Let's check baby's position and discuss "
                "delivery plans.",
                "Fourth ANC visit to check baby's position and discuss birth planning",
            ),
            Language.FR: MessageTemplate(
                "Visite ANC 4 Due",
                "Bonjour {name}! Semaine {week} - Rendez-vous ANC 4. Vérifions la position du bébé et "
                "discutons des plans d'accouchement.",
                "Quatrième visite ANC pour vérifier position bébé et discuter planification naissance",
            ),
            Language.RW: MessageTemplate(
                "ANC 4 Yageze",
                "Mwaramutse {name}! Icyumweru {week} - Ni igihe cya ANC 4. Turebe icyerekezo cy'umwana "
                "tugateganye uko uzabyara.",
                "ANC ya 4 yo kugenzura icyerekezo cy'umwana, kuganira ku buryo bwo kubyara",
            ),
        },
    ),
    _rule(
        "anc_5",
        ScheduleTrack.ANTENATAL,
        (33, 36),
        ReminderType.ANC,
        ReminderPriority.HIGH,
        {
            Language.EN: MessageTemplate(
                "ANC 5 Visit Due",
                "Hello {name}! Week {week} - Almost there! ANC 5 to prepare for delivery and watch for "
                "warning signs.",
                "Fifth ANC visit for delivery preparation and warning signs education",
            ),
            Language.FR: MessageTemplate(
                "Visite ANC 5 Due",
                "Bonjour {name}! Semaine {week} - Presque là! ANC 5 pour préparer l'accouchement et "
                "surveiller les signes d'alarme.",
                "Cinquième visite ANC pour préparation accouchement et éducation signes d'alarme",
            ),
            Language.RW: MessageTemplate(
                "ANC 5 Yageze",
                "Mwaramutse {name}! Icyumweru {week} - Hafi kugerayo! ANC 5 yo kwitegura kubyara no "
                "kumenya ibimenyetso biburira.",
                "ANC ya 5 yo kwitegura kubyara, kureba ibimenyetso biburira",
            ),
        },
    ),
    _rule(
        "anc_weekly",
        ScheduleTrack.ANTENATAL,
        (37, 40),
        ReminderType.ANC,
        ReminderPriority.HIGH,
        {
            Language.EN: MessageTemplate(
                "Weekly ANC Visits Now",
                "Hello {name}! Week {week} - You're full term! Weekly visits now until delivery. "
                "Stay close to the hospital.",
                "Weekly ANC visits until delivery, monitor for labor signs, stay near the hospital",
            ),
            Language.FR: MessageTemplate(
                "Visites ANC Hebdomadaires",
                "Bonjour {name}! Semaine {week} - Vous êtes à terme! Visites hebdomadaires jusqu'à l'accouchement.",
                "Visites ANC hebdomadaires jusqu'à l'accouchement, surveiller les signes du travail, "
                "rester près de l'hôpital",
            ),
            Language.RW: MessageTemplate(
                "ANC Buri Cyumweru",
                "Mwaramutse {name}! Icyumweru {week} - Mwageze mu gihe! Jya kwa muganga buri cyumweru "
                "kugeza ubyaye.",
                "ANC buri cyumweru kugeza igihe cyo kubyara kigera, witegereze ibimenyetso byo kubyara",
            ),
        },
    ),
    _rule(
        "anc_post_term",
        ScheduleTrack.ANTENATAL,
        (41, 42),
        ReminderType.ANC,
        ReminderPriority.HIGH,
        {
            Language.EN: MessageTemplate(
                "Past Due Date Check",
                "Hello {name}! Week {week} - You're past your due date. Many babies arrive late, but "
                "please see your health provider this week.",
                "Post-term check: fetal monitoring and discussion of labor induction",
            ),
            Language.FR: MessageTemplate(
                "Contrôle Après Terme",
                "Bonjour {name}! Semaine {week} - Vous avez dépassé la date prévue. Beaucoup de bébés "
                "arrivent en retard, mais consultez votre soignant cette semaine.",
                "Contrôle après terme: surveillance fœtale et discussion du déclenchement",
            ),
            Language.RW: MessageTemplate(
                "Isuzuma Nyuma y'Igihe",
                "Mwaramutse {name}! Icyumweru {week} - Igihe cyo kubyara cyararenze. Abana benshi "
                "baratinda, ariko jya kwa muganga muri iki cyumweru.",
                "Isuzuma nyuma y'igihe: gukurikirana umwana no kuganira ku gutera ibise",
            ),
        },
    ),
)


# ============================================================================
# CHILD VACCINATIONS (weeks since delivery)
# ============================================================================

_VACCINATION_RULES = (
    _rule(
        "vaccine_birth",
        ScheduleTrack.VACCINATION,
        (0, 0),
        ReminderType.VACCINATION,
        ReminderPriority.HIGH,
        {
            Language.EN: MessageTemplate(
                "Birth Vaccinations Due",
                "Congratulations {name}! Your baby needs immediate vaccinations: BCG and Hepatitis B.",
                "Get BCG (tuberculosis) and Hepatitis B vaccinations immediately after birth",
            ),
            Language.FR: MessageTemplate(
                "Vaccinations de Naissance",
                "Félicitations {name}! Votre bébé a besoin de vaccinations immédiates: BCG et Hépatite B.",
                "Faire vacciner BCG (tuberculose) et Hépatite B immédiatement après la naissance",
            ),
            Language.RW: MessageTemplate(
                "Inkingo zo Kuvuka",
                "Murakaza neza {name}! Umwana wanyu akimara kuvuka agomba gukingirwa BCG na Hepatitis B.",
                "Umwana agomba gukingirwa BCG (Tuberculose) na Hepatitis B ako kanya",
            ),
        },
    ),
    _rule(
        "vaccine_6_weeks",
        ScheduleTrack.VACCINATION,
        (6, 6),
        ReminderType.VACCINATION,
        ReminderPriority.HIGH,
        {
            Language.EN: MessageTemplate(
                "6 Weeks Vaccination Due",
                "Hello {name}! Your baby is 6 weeks old. Time for important vaccinations: DTP, Polio, and more.",
                "Get Pentavalent (DTP-HepB-Hib), PCV 13, OPV and Rotavirus vaccinations",
            ),
            Language.FR: MessageTemplate(
                "Vaccination 6 Semaines",
                "Bonjour {name}! Votre bébé a 6 semaines. Temps pour les vaccinations importantes: "
                "DTP, Polio, et plus.",
                "Faire vacciner Pentavalent (DTP-HepB-Hib), PCV 13, OPV et Rotavirus",
            ),
            Language.RW: MessageTemplate(
                "Inkingo 6 Byumweru",
                "Mwaramutse {name}! Umwana wanyu afite ibyumweru 6. Ni igihe cy'inkingo z'ingenzi: "
                "DTP, Polio, n'izindi.",
                "Inkingo za Pentavalent (DTP-HepB-Hib), PCV 13, OPV na Rotavirus",
            ),
        },
    ),
    _rule(
        "vaccine_10_weeks",
        ScheduleTrack.VACCINATION,
        (10, 10),
        ReminderType.VACCINATION,
        ReminderPriority.HIGH,
        {
            Language.EN: MessageTemplate(
                "10 Weeks Vaccination Due",
                "Hello {name}! Your baby is 10 weeks old. Second round of vaccinations needed today.",
                "Get second doses: Pentavalent 2, PCV 13 2, OPV 2, Rotavirus 2",
            ),
            Language.FR: MessageTemplate(
                "Vaccination 10 Semaines",
                "Bonjour {name}! Votre bébé a 10 semaines. Deuxième série de vaccinations nécessaire aujourd'hui.",
                "Deuxièmes doses: Pentavalent 2, PCV 13 2, OPV 2, Rotavirus 2",
            ),
            Language.RW: MessageTemplate(
                "Inkingo 10 Byumweru",
                "Mwaramutse {name}! Umwana wanyu afite ibyumweru 10. Inkingo zikurikiraho z'umwana zigeze.",
                "Doze ya 2: Pentavalent 2, PCV 13 2, OPV 2, Rotavirus 2",
            ),
        },
    ),
    _rule(
        "vaccine_14_weeks",
        ScheduleTrack.VACCINATION,
        (14, 14),
        ReminderType.VACCINATION,
        ReminderPriority.HIGH,
        {
            Language.EN: MessageTemplate(
                "14 Weeks Vaccination Due",
                "Hello {name}! Your baby is 14 weeks old. Third and final primary series vaccinations due.",
                "Get third doses: Pentavalent 3, PCV 13 3, OPV 3",
            ),
            Language.FR: MessageTemplate(
                "Vaccination 14 Semaines",
                "Bonjour {name}! Votre bébé a 14 semaines. Troisième et dernière série primaire de vaccinations.",
                "Troisièmes doses: Pentavalent 3, PCV 13 3, OPV 3",
            ),
            Language.RW: MessageTemplate(
                "Inkingo 14 Byumweru",
                "Mwaramutse {name}! Umwana wanyu afite ibyumweru 14. Doze ya 3 y'inkingo igeze.",
                "Doze ya 3: Pentavalent 3, PCV 13 3, OPV 3",
            ),
        },
    ),
)


# ============================================================================
# WEEKLY PREGNANCY MILESTONES
# ============================================================================

# week -> (key, en, fr, rw) sentence describing that week
_MILESTONES: tuple[tuple[int, str, str, str, str], ...] = (
    (
        4,
        "heartbeat_development",
        "Your baby's heart is starting to form and beat.",
        "Le cœur de votre bébé commence à se former et à battre.",
        "Umutima w'umwana wawe uratangira gukora.",
    ),
    (
        8,
        "brain_development",
        "Your baby's brain is developing quickly.",
        "Le cerveau de votre bébé se développe rapidement.",
        "Ubwonko bw'umwana wawe burakura vuba.",
    ),
    (
        12,
        "first_trimester_complete",
        "You have completed your first trimester.",
        "Vous avez terminé votre premier trimestre.",
        "Urangije igihembwe cya mbere cy'inda.",
    ),
    (
        16,
        "gender_determination",
        "Your baby's sex can now be seen on a scan.",
        "Le sexe de votre bébé peut maintenant être vu à l'échographie.",
        "Igitsina cy'umwana wawe gishobora kugaragara mu isuzuma.",
    ),
    (
        20,
        "anatomy_scan_time",
        "It's time for the anatomy scan.",
        "C'est le moment de l'échographie morphologique.",
        "Ni igihe cy'isuzuma ry'ingingo z'umwana.",
    ),
    (
        24,
        "viability_milestone",
        "Your baby has reached the viability milestone.",
        "Votre bébé a atteint le seuil de viabilité.",
        "Umwana wawe ageze ku gihe ashobora kubaho aramutse avutse.",
    ),
    (
        28,
        "third_trimester_start",
        "Your third trimester starts now.",
        "Votre troisième trimestre commence maintenant.",
        "Igihembwe cya gatatu gitangiye.",
    ),
    (
        32,
        "rapid_growth_phase",
        "Your baby is in a rapid growth phase.",
        "Votre bébé est dans une phase de croissance rapide.",
        "Umwana wawe ari gukura vuba cyane.",
    ),
    (
        36,
        "lung_maturation",
        "Your baby's lungs are maturing.",
        "Les poumons de votre bébé arrivent à maturité.",
        "Ibihaha by'umwana wawe birakomera.",
    ),
    (
        40,
        "full_term_ready",
        "Your baby is full term and ready to meet you.",
        "Votre bébé est à terme et prêt à naître.",
        "Umwana wawe yageze igihe cyo kuvuka.",
    ),
)


def _milestone_rule(week: int, key: str, en: str, fr: str, rw: str) -> ReminderRule:
    return _rule(
        f"milestone_{key}",
        ScheduleTrack.MILESTONE,
        (week, week),
        ReminderType.MILESTONE,
        ReminderPriority.MEDIUM,
        {
            Language.EN: MessageTemplate(
                "Pregnancy Milestone",
                f"🌟 Week {{week}} Milestone, {{name}}! {en} Check the app for details!",
            ),
            Language.FR: MessageTemplate(
                "Étape de Grossesse",
                f"🌟 Étape Semaine {{week}}, {{name}}! {fr} Consultez l'app pour les détails!",
            ),
            Language.RW: MessageTemplate(
                "Intambwe y'Inda",
                f"🌟 Intambwe Icyumweru {{week}}, {{name}}! {rw} Reba aplikasiyo kugira ngo ubone birambuye!",
            ),
        },
    )


_MILESTONE_RULES = tuple(_milestone_rule(*milestone) for milestone in _MILESTONES)


class MedicalScheduleTable:
    """Read-only lookup over the reminder rules, grouped by track."""

    def __init__(self, rules: tuple[ReminderRule, ...]):
        self._rules = rules
        self._by_track: dict[ScheduleTrack, tuple[ReminderRule, ...]] = {
            track: tuple(rule for rule in rules if rule.track is track) for track in ScheduleTrack
        }
        self._by_key = MappingProxyType({rule.key: rule for rule in rules})
        if len(self._by_key) != len(rules):
            raise ValueError("Reminder rule keys must be unique")
        for track_rules in self._by_track.values():
            self._check_no_overlap(track_rules)

    @staticmethod
    def _check_no_overlap(rules: tuple[ReminderRule, ...]) -> None:
        ordered = sorted(rules, key=lambda rule: rule.week_start)
        for previous, current in zip(ordered, ordered[1:]):
            if current.week_start <= previous.week_end:
                raise ValueError(f"Rules {previous.key} and {current.key} overlap")

    @property
    def rules(self) -> tuple[ReminderRule, ...]:
        return self._rules

    def rules_for(self, track: ScheduleTrack) -> tuple[ReminderRule, ...]:
        """Rules of a track in table order."""
        return self._by_track[track]

    def get(self, key: str) -> ReminderRule | None:
        return self._by_key.get(key)

    def __len__(self) -> int:
        return len(self._rules)


MEDICAL_SCHEDULE = MedicalScheduleTable(_ANTENATAL_RULES + _VACCINATION_RULES + _MILESTONE_RULES)
