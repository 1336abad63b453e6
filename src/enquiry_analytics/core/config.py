import os

# In a real deployment, set these through the environment or a .env loader
MONGO_URI: str = os.getenv("MONGO_URI", "mongodb://localhost:27017")
MONGO_DB_NAME: str = os.getenv("MONGO_DB_NAME", "sales_enquiries")

ENQUIRY_COLLECTION: str = os.getenv("ENQUIRY_COLLECTION", "enquiry_details")
CLIENT_MODEL_COLLECTION: str = os.getenv("CLIENT_MODEL_COLLECTION", "client_models")
TRANSCRIPT_COLLECTION: str = os.getenv("TRANSCRIPT_COLLECTION", "transcript_details")

TRANSCRIPT_LIMIT: int = int(os.getenv("TRANSCRIPT_LIMIT", "50"))

CORS_ORIGINS: list[str] = [
    origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
]

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

HOST: str = os.getenv("HOST", "0.0.0.0")
PORT: int = int(os.getenv("PORT", "5000"))
