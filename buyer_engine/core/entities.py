"""Core entities for the buyer intelligence domain."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Mapping, Optional


class Persona(str, Enum):
    """Closed set of behavioural buyer classifications."""

    YIELD_INVESTOR = "yield-investor"
    CAPITAL_INVESTOR = "capital-investor"
    LIFESTYLE = "lifestyle"
    VISA_DRIVEN = "visa-driven"
    EXPLORER = "explorer"


class LeadTemperature(str, Enum):
    COLD = "cold"
    WARM = "warm"


class LeadCategory(str, Enum):
    COLD = "cold"
    WARM = "warm"
    HOT = "hot"
    READY_TO_CALL = "ready-to-call"


class IntentSignal(str, Enum):
    """Buyer intentions recognised in chat messages."""

    PLANNING_VISIT = "planning_visit"
    PURCHASE_INTENT = "purchase_intent"
    CALL_REQUEST = "call_request"
    PROPERTY_INTEREST = "property_interest"
    BOOKING_INTENT = "booking_intent"


class MessageRole(str, Enum):
    BUYER = "buyer"
    ADVISOR = "advisor"


class PropertyType(str, Enum):
    STUDIO = "studio"
    ONE_BEDROOM = "1br"
    TWO_BEDROOM = "2br"
    THREE_BEDROOM = "3br"
    TOWNHOUSE = "townhouse"
    VILLA = "villa"
    PENTHOUSE = "penthouse"


class AreaCluster(str, Enum):
    PRIME = "prime"
    GROWTH_CORRIDOR = "growth-corridor"
    FAMILY_HUB = "family-hub"
    WATERFRONT = "waterfront"
    EMERGING = "emerging"


class Currency(str, Enum):
    USD = "USD"
    AED = "AED"
    GBP = "GBP"
    EUR = "EUR"
    INR = "INR"


# Intake keys accepted for each onboarding field, canonical name first.
_ANSWER_ALIASES: Mapping[str, tuple[str, ...]] = {
    "goal": ("goal",),
    "budgetBand": ("budgetBand", "budget_band"),
    "urgencyTimeline": ("urgencyTimeline", "urgency_timeline", "urgency"),
    "riskTolerance": ("riskTolerance", "risk_tolerance"),
    "country": ("country",),
    "email": ("email",),
    "firstName": ("firstName", "first_name"),
}


@dataclass(frozen=True)
class OnboardingAnswers:
    """Answers collected by the intake flow. Every field may be missing."""

    goal: Optional[str] = None
    budget_band: Optional[str] = None
    urgency_timeline: Optional[str] = None
    risk_tolerance: Optional[str] = None
    country: Optional[str] = None
    email: Optional[str] = None
    first_name: Optional[str] = None

    @classmethod
    def from_mapping(cls, raw: Mapping[str, object]) -> "OnboardingAnswers":
        """Build answers from the intake payload, ignoring unknown keys."""

        values: dict[str, Optional[str]] = {}
        for canonical, aliases in _ANSWER_ALIASES.items():
            value: Optional[str] = None
            for alias in aliases:
                candidate = raw.get(alias)
                if candidate is not None and str(candidate).strip():
                    value = str(candidate).strip()
                    break
            values[canonical] = value

        return cls(
            goal=values["goal"],
            budget_band=values["budgetBand"],
            urgency_timeline=values["urgencyTimeline"],
            risk_tolerance=values["riskTolerance"],
            country=values["country"],
            email=values["email"],
            first_name=values["firstName"],
        )


@dataclass(frozen=True)
class BuyerProfile:
    """Durable classification of a buyer produced at the end of onboarding."""

    persona: Persona
    confidence: int
    urgency_score: int
    lead_temperature: LeadTemperature
    goal: Optional[str]
    budget_band: Optional[str]
    risk_tolerance: str
    country: str
    currency: Currency
    first_name: str = "Friend"
    email: str = ""
    language: str = "en"

    def __post_init__(self) -> None:
        if not 0 <= self.confidence <= 100:
            raise ValueError(f"confidence must be within [0, 100], got {self.confidence}")
        if not 0 <= self.urgency_score <= 100:
            raise ValueError(f"urgency_score must be within [0, 100], got {self.urgency_score}")


@dataclass(frozen=True)
class ChatMessage:
    """A single message of a buyer/advisor conversation."""

    role: MessageRole
    content: str
    timestamp: datetime = field(default_factory=datetime.utcnow)
    intent_signals: Optional[frozenset[IntentSignal]] = None
    escalation: Optional[bool] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "role", MessageRole(self.role))

    def annotate(self, signals: frozenset[IntentSignal], escalate: bool) -> "ChatMessage":
        return replace(self, intent_signals=signals, escalation=escalate)


@dataclass(frozen=True)
class SimulationInputs:
    """Investment parameters for a simulation. Budget is expressed in USD."""

    budget: float
    property_type: PropertyType
    area_cluster: AreaCluster
    time_horizon: int = 5
    display_currency: Currency = Currency.USD


@dataclass(frozen=True)
class ScenarioSet:
    """One figure per projection scenario."""

    conservative: float
    moderate: float
    optimistic: float

    def as_dict(self) -> dict[str, float]:
        return {
            "conservative": self.conservative,
            "moderate": self.moderate,
            "optimistic": self.optimistic,
        }


@dataclass(frozen=True)
class SimulationResult:
    """Derived projections for a single simulation request."""

    inputs: SimulationInputs
    yields: ScenarioSet
    appreciation: ScenarioSet
    annual_rental_income: ScenarioSet
    exit_value: Mapping[int, float]
    total_return: Mapping[int, float]

    @property
    def conservative_yield(self) -> float:
        return self.yields.conservative

    @property
    def moderate_yield(self) -> float:
        return self.yields.moderate

    @property
    def optimistic_yield(self) -> float:
        return self.yields.optimistic


@dataclass(frozen=True)
class AdvisorReply:
    """Templated advisor answer for an inbound buyer message."""

    topic: str
    content: str
    signals: frozenset[IntentSignal]
    escalate: bool


@dataclass(frozen=True)
class LeadActivity:
    """Engagement counters supplied by the host for lead scoring."""

    onboarding_completed: bool = True
    roi_simulations_run: int = 0
    conversations: int = 0
    buyer_messages: int = 0
    days_since_creation: float = 0.0
    recommendations_viewed: int = 0
    call_requested: bool = False
    contact_shared: bool = False


@dataclass(frozen=True)
class LeadScoreBreakdown:
    """Component points and totals of an engagement lead score."""

    onboarding_points: int
    simulation_points: int
    chat_points: int
    budget_points: int
    urgency_points: int
    returning_points: int
    roi_simulations_run: int
    conversations: int
    buyer_messages: int
    recommendations_viewed: int
    call_requested: bool
    contact_shared: bool
    budget_clarity: bool
    total_score: int
    category: LeadCategory


@dataclass(frozen=True)
class HandoffPackage:
    """Summary handed to a human agent when a conversation escalates."""

    profile: BuyerProfile
    score: LeadScoreBreakdown
    persona_summary: str
    urgency_level: str
    timeline_hints: list[str]
    tools_used: Mapping[str, int]
    questions_asked: list[str]
    suggested_opener: str
    next_best_action: str
    talking_points: list[str]


__all__ = [
    "AdvisorReply",
    "AreaCluster",
    "BuyerProfile",
    "ChatMessage",
    "Currency",
    "HandoffPackage",
    "IntentSignal",
    "LeadActivity",
    "LeadCategory",
    "LeadScoreBreakdown",
    "LeadTemperature",
    "MessageRole",
    "OnboardingAnswers",
    "Persona",
    "PropertyType",
    "ScenarioSet",
    "SimulationInputs",
    "SimulationResult",
]
