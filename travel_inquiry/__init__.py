"""Travel inquiry submission service.

Validates contact-form submissions, stores them and sends a confirmation
to the customer plus a notification to the business.
"""

from travel_inquiry.version import __version__

__all__ = ["__version__"]
