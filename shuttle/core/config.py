from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    ORS_API_KEY: str = ""
    ORS_BASE_URL: str = "https://api.openrouteservice.org"
    GEOCODE_COUNTRY: str = "ZA"

    RESEND_API_KEY: str = ""
    RESEND_BASE_URL: str = "https://api.resend.com"
    SENDER_EMAIL: str = "Modjadji's Shuttle Service <bookings@modjadjishuttle.co.za>"
    OWNER_EMAIL: str = ""

    HTTP_TIMEOUT: float = 10.0

    REDIS_URL: str = ""

    RATE_LIMIT: int = 100
    RATE_LIMIT_WINDOW: int = 600  # 10 minutes

    IDEMPOTENCY_TTL: int = 300  # 5 minutes

    BASE_FEE: float = 50.0
    BOOKING_REFERENCE_PREFIX: str = "MSS"

    API_TITLE: str = "Shuttle Quote Service"
    API_DESCRIPTION: str = "Quotes and books point-to-point shuttle trips"
    API_VERSION: str = "1.0.0"

    HOST: str = "0.0.0.0"
    PORT: int = 8000
    FORWARDED_ALLOW_IPS: str = "127.0.0.1"

    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
