"""Catalogue bounded context — products offered by the storefront.

The catalogue owns Product records. Everything downstream (cart, checkout,
order history) only ever reads them and keeps its own denormalized snapshot.
"""

from protean.domain import Domain

from catalogue.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging(log_dir="logs", log_file_prefix="storefront")

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
catalogue = Domain(name="catalogue")
