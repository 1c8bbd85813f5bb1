"""Reviews & Ratings bounded context — service provider reviews for WheelTrust.

Handles the review lifecycle (submission, helpful marks, reports, removal)
and keeps each service provider's rating aggregate in step with its reviews.
"""

from protean.domain import Domain

from reviews.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
reviews = Domain(name="reviews")
