from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    PROJECT_NAME: str = "TeamHub"
    API_V1_STR: str = "/api/v1"

    MONGODB_URL: str
    DATABASE_NAME: str = "teamhub"

    # Tokens issued by the identity provider are verified with this key
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Invites
    INVITE_DEFAULT_EXPIRY_DAYS: int = 7
    INVITE_CODE_LENGTH: int = 8

    # Blob storage (GridFS)
    STORAGE_BUCKET_NAME: str = "blobs"
    UPLOAD_URL_EXPIRE_MINUTES: int = 15
    DOWNLOAD_URL_EXPIRE_MINUTES: int = 60
    PUBLIC_BASE_URL: str = "http://localhost:8000"

    # Read defaults
    RECENT_TASKS_DEFAULT_LIMIT: int = 4
    ACTIVITY_DEFAULT_LIMIT: int = 5
    DUE_TASKS_DEFAULT_LIMIT: int = 5
    EXPENSES_DEFAULT_LIMIT: int = 10

    # Roster lock used for last-admin checks
    ROSTER_LOCK_TTL_SECONDS: int = 10

    LOG_LEVEL: str = "INFO"

    class Config:
        case_sensitive = True
        env_file = ".env"


settings = Settings()
