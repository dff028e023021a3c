from gardenplan.api.models.bed import Bed
from gardenplan.api.models.plant import Plant
from gardenplan.api.models.placement import BedPlacement

__all__ = ["Bed", "Plant", "BedPlacement"]
