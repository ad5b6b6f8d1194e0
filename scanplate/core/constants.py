"""Application-wide constants and configuration values.

Centralizes magic numbers and storage keys so the cart, the checkout
and the storage back-ends agree on them.
"""

# ============== STORAGE ==============
CART_STORAGE_KEY = "scanPlateCart"
CART_FILE_PATH = "data/cart.json"
CART_EXPIRY_SECONDS = 24 * 60 * 60  # Redis TTL, refreshed on every write

CONTACT_NAME_KEY = "customerName"
CONTACT_PHONE_KEY = "customerPhone"
CONTACT_EMAIL_KEY = "customerEmail"

# ============== CONFIGURATION KEY ==============
# Control characters never appear in ids, component names or extra names.
KEY_GROUP_SEPARATOR = "\x1f"
KEY_MEMBER_SEPARATOR = "\x1e"

# ============== MONEY ==============
MONEY_PLACES = "0.01"

# ============== VALIDATION ==============
MIN_QUANTITY = 1
MIN_PHONE_DIGITS = 7
MAX_NOTES_LENGTH = 1000
MAX_NAME_LENGTH = 100

# ============== API ==============
DEFAULT_API_URL = "http://localhost:5000/api/public"
API_TIMEOUT_SECONDS = 30
