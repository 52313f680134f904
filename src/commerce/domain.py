"""Commerce bounded context: the authoritative store cart.

Owns carts, their line items, and the calculated variant prices used to
price new rows. The storefront talks to it through the /store HTTP API and
treats every call as fallible.
"""

import structlog
from protean.domain import Domain

commerce = Domain(name="commerce")

logger = structlog.get_logger(__name__)
