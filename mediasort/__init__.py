"""
mediasort - Sort photos and videos into a year/month folder structure.

Files found under a source tree are classified by extension, dated from their
last write time (or from the WhatsApp naming convention) and copied or moved
into a dated destination tree without overwriting anything already there.
"""

__version__ = "1.0.0"
__copyright__ = "MIT License"


# Public API
from .classifier import Classifier
from .cli import main
from .config import Config
from .core import MediaSorter, validate_paths
from .filters import FilterSet
from .models import CaptureDate, Category, CategorySelection, ClassifiedEntry, Outcome, SortOptions
from .resolver import DestinationResolver
from .scanner import DiscoveryWalker

__all__ = [ "main", "Config", "MediaSorter", "validate_paths", "Classifier", "FilterSet",
            "DestinationResolver", "DiscoveryWalker", "CaptureDate", "Category",
            "CategorySelection", "ClassifiedEntry", "Outcome", "SortOptions" ]
