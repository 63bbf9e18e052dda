"""Configuration for graph construction and layout, per view."""

from dataclasses import dataclass
from enum import Enum

from topicmap.clustering.matcher import MatcherVariant
from topicmap.config import settings


class RadiusLaw(str, Enum):
    """How node radius grows with node weight."""

    LOG = "log"  # base + log(weight) * scale
    SQRT = "sqrt"  # base + sqrt(weight) * scale


class EdgeStrategy(str, Enum):
    """How edges are derived."""

    SEQUENTIAL = "sequential"  # Consecutive topics of one conversation
    TOKEN_OVERLAP = "token_overlap"  # Cluster labels sharing significant words


# Saturated colors for white labels under the node
CHAIN_PALETTE: tuple[str, ...] = (
    "#3b82f6",  # blue
    "#8b5cf6",  # violet
    "#ec4899",  # pink
    "#10b981",  # emerald
    "#f59e0b",  # amber
    "#ef4444",  # red
)

# Pastel colors so black text inside the node stays readable
MAP_PALETTE: tuple[str, ...] = (
    "#93c5fd",  # blue-300
    "#c4b5fd",  # violet-300
    "#f9a8d4",  # pink-300
    "#6ee7b7",  # emerald-300
    "#fcd34d",  # amber-300
    "#fca5a5",  # red-300
    "#67e8f9",  # cyan-300
    "#fdba74",  # orange-300
)


@dataclass
class ForceConfig:
    """Force constants for one simulation."""

    # Repulsion between node pairs
    repulsion_strength: float = 400.0  # Numerator of the inverse-square term
    overlap_padding: float = 20.0  # Extra gap added to the sum of radii
    overlap_stiffness: float = 0.1  # Linear push while circles overlap
    max_force: float = 2.0  # Per-pair clamp
    cutoff: float = 800.0  # Pairs farther apart ignore each other

    # Springs along edges
    spring_stiffness: float = 0.05  # Multiplied by edge strength
    spring_length: float = 80.0  # Added to the sum of radii for the rest length

    # Center gravity and integration
    gravity: float = 0.0005
    friction: float = 0.70  # Velocity multiplier per tick, < 1


@dataclass
class ZoomConfig:
    """View scale bounds."""

    initial: float = 1.0
    step: float = 0.1
    minimum: float = 0.5
    maximum: float = 2.0

    def __post_init__(self) -> None:
        if self.minimum > self.maximum:
            raise ValueError(f"Zoom minimum {self.minimum} exceeds maximum {self.maximum}")
        if not self.minimum <= self.initial <= self.maximum:
            raise ValueError(f"Initial zoom {self.initial} outside [{self.minimum}, {self.maximum}]")


@dataclass
class ViewProfile:
    """Everything that differs between the chain view and the topic map."""

    name: str
    matcher: MatcherVariant | None  # None: topics are not clustered
    radius_law: RadiusLaw
    radius_base: float
    radius_scale: float
    edge_strategy: EdgeStrategy
    forces: ForceConfig
    zoom: ZoomConfig
    palette: tuple[str, ...]

    # Simulation space
    width: float = 600.0
    height: float = 600.0

    # Initial placement
    spiral_base: float = 50.0  # Chain: distance of the first topic from center
    spiral_step: float = 10.0  # Chain: extra distance per topic
    jitter: float = 50.0  # Map: max offset from center on each axis
    seed: int | None = None

    # Clustering
    min_label_length: int = 0
    recent_limit: int | None = None

    @property
    def center(self) -> tuple[float, float]:
        return (self.width / 2, self.height / 2)


def chain_profile() -> ViewProfile:
    """Profile for the single-conversation topic chain."""
    return ViewProfile(
        name="chain",
        matcher=None,
        radius_law=RadiusLaw.LOG,
        radius_base=20.0,
        radius_scale=8.0,
        edge_strategy=EdgeStrategy.SEQUENTIAL,
        forces=ForceConfig(
            repulsion_strength=600.0,
            overlap_padding=50.0,
            overlap_stiffness=0.05,
            max_force=3.0,
            cutoff=600.0,
            spring_stiffness=0.001,
            spring_length=100.0,
            gravity=0.002,
            friction=0.9,
        ),
        zoom=ZoomConfig(initial=1.0, minimum=0.5, maximum=2.0),
        palette=CHAIN_PALETTE,
        width=600.0,
        height=600.0,
        seed=settings.layout_seed,
    )


def map_profile() -> ViewProfile:
    """Profile for the cross-conversation topic map."""
    return ViewProfile(
        name="map",
        matcher=MatcherVariant.INTERSECTION,
        radius_law=RadiusLaw.SQRT,
        radius_base=40.0,
        radius_scale=15.0,
        edge_strategy=EdgeStrategy.TOKEN_OVERLAP,
        forces=ForceConfig(),
        zoom=ZoomConfig(initial=0.9, minimum=0.4, maximum=2.0),
        palette=MAP_PALETTE,
        width=1000.0,
        height=800.0,
        seed=settings.layout_seed,
        min_label_length=3,
        recent_limit=settings.recent_conversation_limit,
    )

