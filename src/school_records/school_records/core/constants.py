"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Local substrate sentinel marking that seed data was written.
SEED_SENTINEL_KEY = "dataInitialized"

PDF_MIME_TYPE = "application/pdf"
MAX_ATTACHMENT_BYTES = 10 * 1024 * 1024
DEFAULT_MAX_ATTACHMENTS = 5

ADVANCE_RECEIPT_PREFIX = "ADV"

DEFAULT_LOCAL_STORE_PATH = "instance/local_store.json"
# Roughly what browsers grant a single origin.
DEFAULT_LOCAL_STORE_QUOTA_BYTES = 5 * 1024 * 1024

ADMIN_SENDER_NAME = "Administration École Numérique"
ADMIN_SENDER_EMAIL = "admin@ecole-numerique.ci"
