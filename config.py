import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./padel_shop.db")
    DB_AUTO_CREATE = bool(data.get("DB_AUTO_CREATE", True))
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    API_RELOAD = bool(data.get("API_RELOAD", False))
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    API_KEY = data.get("API_KEY", "")
    AUTH_DISABLED = bool(data.get("AUTH_DISABLED", False))
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))

    # Pricing
    DEFAULT_CURRENCY = data.get("DEFAULT_CURRENCY", "BGN")
    DEFAULT_VAT_RATE = str(data.get("DEFAULT_VAT_RATE", "0.20"))

    # Numbering
    ORDER_SEQUENCE_NAME = data.get("ORDER_SEQUENCE_NAME", "orders")
    ORDER_SEQUENCE_START = int(data.get("ORDER_SEQUENCE_START", 1))
    ORDER_NUMBER_WIDTH = int(data.get("ORDER_NUMBER_WIDTH", 7))
    INVOICE_SEQUENCE_NAME = data.get("INVOICE_SEQUENCE_NAME", "invoiceCounter")
    INVOICE_SEQUENCE_START = int(data.get("INVOICE_SEQUENCE_START", 100000001))
    INVOICE_NUMBER_WIDTH = int(data.get("INVOICE_NUMBER_WIDTH", 10))

    # Catalog cache
    CATALOG_CACHE_TTL_SECONDS = float(data.get("CATALOG_CACHE_TTL_SECONDS", 300))

    # Company block printed on invoices
    COMPANY_NAME = data.get("COMPANY_NAME", "Sofia Padel Ltd.")
    COMPANY_ADDRESS = data.get("COMPANY_ADDRESS", "1 Vitosha Blvd")
    COMPANY_CITY = data.get("COMPANY_CITY", "Sofia")
    COMPANY_VAT_NUMBER = data.get("COMPANY_VAT_NUMBER", "BG000000000")

    # E-mail
    EMAIL_BACKEND = data.get("EMAIL_BACKEND", "logging")  # smtp | logging
    EMAIL_FROM_NAME = data.get("EMAIL_FROM_NAME", "Sofia Padel")
    SMTP_HOST = data.get("SMTP_HOST", "")
    SMTP_PORT = int(data.get("SMTP_PORT", 465))
    SMTP_USER = data.get("SMTP_USER", "")
    SMTP_PASSWORD = data.get("SMTP_PASSWORD", "")
    SMTP_USE_SSL = bool(data.get("SMTP_USE_SSL", True))

    # Speedy address autocomplete
    SPEEDY_API_URL = data.get("SPEEDY_API_URL", "https://services.speedy.bg/api/")
    SPEEDY_USER = data.get("SPEEDY_USER", "")
    SPEEDY_PASSWORD = data.get("SPEEDY_PASSWORD", "")
    SPEEDY_LANGUAGE = data.get("SPEEDY_LANGUAGE", "EN")
    SPEEDY_TIMEOUT_SECONDS = float(data.get("SPEEDY_TIMEOUT_SECONDS", 10.0))
