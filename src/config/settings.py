import os
import logging
import tempfile
from typing import Dict, List, Any, Optional
from dotenv import load_dotenv
from pydantic_settings import BaseSettings

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

_as_bool = lambda x: str(x).lower() in ("true", "1", "yes")

# Sessions signed with this key can be forged by anyone who reads the source
DEFAULT_SECRET_KEY = "change-this-in-production"

# Environment variable configuration definition.
# Credentials are never required here; routes that need one fail per request.
ENV_VARS = {
    # Application
    "APP_PREFIX": {"default": "/api"},
    "SECRET_KEY": {"default": DEFAULT_SECRET_KEY},
    "SESSION_MAX_AGE": {"default": "86400", "type": int},  # seconds
    "DEBUG": {"default": "False", "type": _as_bool},
    "HOST": {"default": "0.0.0.0"},
    "PORT": {"default": "8000", "type": int},
    "WORKERS": {"default": "1", "type": int},

    # CORS
    "ALLOWED_ORIGINS": {"default": "http://localhost:3000,http://127.0.0.1:3000", "type": lambda x: [o.strip() for o in x.split(",") if o.strip()]},

    # Logging
    "LOG_DIR": {"default": "./logs"},
    "LOG_LEVEL": {"default": "INFO"},

    # Bolna
    "BOLNA_API_KEY": {"required": False},
    "BOLNA_AGENT_ID": {"required": False},
    "BOLNA_API_URL": {"default": "https://api.bolna.ai/v2"},
    "BOLNA_BASE_URL": {"default": "https://api.bolna.ai"},

    # Knowlarity
    "KNOWLARITY_API_KEY": {"required": False},
    "KNOWLARITY_SR_NUMBER": {"required": False},
    "KNOWLARITY_C2C_URL": {"default": "https://konnect.knowlarity.com/konnect/makecall/"},
    "KNOWLARITY_CALL_LOG_URL": {"default": "https://kpi.knowlarity.com/Basic/v1/account/calllog"},

    # Latest conversation store
    "CONVERSATION_STORE_BACKEND": {
        "default": "memory",
        "validator": lambda x: x in ("memory", "file")
    },
    "CONVERSATION_STORE_PATH": {"default": os.path.join(tempfile.gettempdir(), "latest_conversation.json")},

    # Live stream
    "SSE_HEARTBEAT_INTERVAL": {"default": "30", "type": float},  # seconds

    # Aggregation
    "DEFAULT_PAGE_SIZE": {"default": "20", "type": int},
    "EXECUTION_FETCH_LIMIT": {"default": "1000", "type": int},
    "BATCH_RUN_DELAY_MINUTES": {"default": "3", "type": int},

    # Users
    "USERS_FILE": {"default": "./users.json"},
}


def get_env_var(key: str, config: Dict[str, Any]) -> Any:
    """
    Get environment variable with proper error handling and type conversion
    """
    value = os.getenv(key, config.get("default"))

    if config.get("required", False) and not value:
        raise ValueError(f"{key} is required but not set.")

    if value is not None and "type" in config:
        try:
            value = config["type"](value)
        except ValueError as e:
            raise ValueError(f"Invalid value for {key}: {e}")

    if value is not None and "validator" in config and not config["validator"](value):
        raise ValueError(f"Invalid value for {key}: {value!r} failed validation")

    return value


# Initialize all variables
env_values = {}
for key, config in ENV_VARS.items():
    env_values[key] = get_env_var(key, config)


# Create Pydantic settings class
class Settings(BaseSettings):
    # API Settings
    DEBUG: bool = env_values.get("DEBUG", False)
    HOST: str = env_values.get("HOST", "0.0.0.0")
    PORT: int = env_values.get("PORT", 8000)
    WORKERS: int = env_values.get("WORKERS", 1)
    APP_PREFIX: str = env_values.get("APP_PREFIX", "/api")
    SECRET_KEY: str = env_values.get("SECRET_KEY", DEFAULT_SECRET_KEY)
    SESSION_MAX_AGE: int = env_values.get("SESSION_MAX_AGE", 86400)

    # CORS Settings
    @property
    def ALLOWED_ORIGINS(self) -> List[str]:
        """Process ALLOWED_ORIGINS separately to avoid JSON parsing issues"""
        return env_values.get("ALLOWED_ORIGINS") or ["*"]

    # Logging
    LOG_DIR: str = env_values.get("LOG_DIR", "./logs")
    LOG_LEVEL: str = env_values.get("LOG_LEVEL", "INFO")

    # Bolna
    BOLNA_API_KEY: Optional[str] = env_values.get("BOLNA_API_KEY")
    BOLNA_AGENT_ID: Optional[str] = env_values.get("BOLNA_AGENT_ID")
    BOLNA_API_URL: str = env_values.get("BOLNA_API_URL", "https://api.bolna.ai/v2")
    BOLNA_BASE_URL: str = env_values.get("BOLNA_BASE_URL", "https://api.bolna.ai")

    # Knowlarity
    KNOWLARITY_API_KEY: Optional[str] = env_values.get("KNOWLARITY_API_KEY")
    KNOWLARITY_SR_NUMBER: Optional[str] = env_values.get("KNOWLARITY_SR_NUMBER")
    KNOWLARITY_C2C_URL: str = env_values.get("KNOWLARITY_C2C_URL")
    KNOWLARITY_CALL_LOG_URL: str = env_values.get("KNOWLARITY_CALL_LOG_URL")

    # Store
    CONVERSATION_STORE_BACKEND: str = env_values.get("CONVERSATION_STORE_BACKEND", "memory")
    CONVERSATION_STORE_PATH: str = env_values.get("CONVERSATION_STORE_PATH")

    # Live stream
    SSE_HEARTBEAT_INTERVAL: float = env_values.get("SSE_HEARTBEAT_INTERVAL", 30.0)

    # Aggregation
    DEFAULT_PAGE_SIZE: int = env_values.get("DEFAULT_PAGE_SIZE", 20)
    EXECUTION_FETCH_LIMIT: int = env_values.get("EXECUTION_FETCH_LIMIT", 1000)
    BATCH_RUN_DELAY_MINUTES: int = env_values.get("BATCH_RUN_DELAY_MINUTES", 3)

    # Users
    USERS_FILE: str = env_values.get("USERS_FILE", "./users.json")

    class Config:
        env_file = ".env"
        extra = "ignore"


# Create settings instance
settings = Settings()

# Make env_values available globally
for key, value in env_values.items():
    globals()[key] = value


def get_config_dict() -> Dict[str, Any]:
    """Get a dictionary of all configuration values for debugging"""
    sensitive_keys = {"SECRET_KEY", "BOLNA_API_KEY", "KNOWLARITY_API_KEY"}
    return {
        key: "*****" if key in sensitive_keys and value else value
        for key, value in env_values.items()
    }


def generate_env_template() -> str:
    """Generate a template .env file based on configuration"""
    template = ["# Environment Variables Template\n"]

    for key, config in ENV_VARS.items():
        comment = []
        if config.get("required"):
            comment.append("Required")
        if "default" in config:
            comment.append(f"Default: {config['default']}")

        if comment:
            template.append(f"# {', '.join(comment)}")
        template.append(f"{key}=\n")

    return "\n".join(template)


def uses_default_secret_key(secret_key: Optional[str], debug: bool) -> bool:
    """True when sessions would be signed with the built-in key outside debug mode."""
    return not debug and (not secret_key or secret_key == DEFAULT_SECRET_KEY)


# Log configuration for debugging if DEBUG mode is enabled
if DEBUG:
    logger.debug("Current Configuration:")
    for key, value in sorted(get_config_dict().items()):
        logger.debug(f"{key}: {value}")

__all__ = list(ENV_VARS.keys()) + [
    'get_config_dict',
    'generate_env_template',
    'uses_default_secret_key',
    'DEFAULT_SECRET_KEY',
    'settings'
]
