"""Re-export all models so Base.metadata sees them."""

from construction_stages.db.models.construction_stage import ConstructionStage

__all__ = [
    "ConstructionStage",
]
