import os

from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE", "sqlite:///./cloudvault.db")

SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

STORAGE_ENDPOINT = os.getenv("STORAGE_ENDPOINT", "localhost:9000")
STORAGE_ACCESS_KEY = os.getenv("STORAGE_ACCESS_KEY", "minioadmin")
STORAGE_SECRET_KEY = os.getenv("STORAGE_SECRET_KEY", "minioadmin")
STORAGE_BUCKET = os.getenv("STORAGE_BUCKET", "uploads")
STORAGE_SECURE = os.getenv("STORAGE_SECURE", "false").lower() in ("1", "true", "yes")
STORAGE_PUBLIC_URL = os.getenv("STORAGE_PUBLIC_URL", f"http://{STORAGE_ENDPOINT}")
STORAGE_TIMEOUT = float(os.getenv("STORAGE_TIMEOUT", "5"))
STORAGE_RETRIES = int(os.getenv("STORAGE_RETRIES", "0"))

SHARE_BASE_URL = os.getenv("SHARE_BASE_URL", "http://localhost:5000/api/share/access/")

# Lifetime of a signed download URL, in seconds.
SIGNED_URL_EXPIRES = 600

MAX_UPLOAD_SIZE = int(os.getenv("MAX_UPLOAD_SIZE", str(50 * 1024 * 1024)))

STRIPE_SECRET_KEY = os.getenv("STRIPE_SECRET_KEY")
STRIPE_API_URL = os.getenv("STRIPE_API_URL", "https://api.stripe.com/v1")
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")
PREMIUM_PRICE = int(os.getenv("PREMIUM_PRICE", "19900"))
PREMIUM_CURRENCY = os.getenv("PREMIUM_CURRENCY", "inr")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
