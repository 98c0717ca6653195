"""
Runtime configuration

Values come from the environment (a local .env file is honoured).
"""
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL")
DATABASE_NAME = os.getenv("DATABASE_NAME")

ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@piwkina.ge")
STORAGE_PATH = os.getenv("STORAGE_PATH", ".piwkina-storage.json")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
PORT = int(os.getenv("PORT", 8000))

CART_STORAGE_KEY = "piwkina-cart"
SESSION_STORAGE_KEY = "piwkina-session"

# Delivery is free for now
DELIVERY_FEE = 0.0

# Access tokens
SECRET_KEY = os.getenv("SECRET_KEY", "piwkina-secret-change-me")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 12))
