"""Dashboard Service Configuration."""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file from service directory
service_dir = Path(__file__).parent
env_file = service_dir / ".env"
if env_file.exists():
    load_dotenv(env_file)

# Service Configuration
PORT = int(os.getenv("PORT", "8080"))
SERVICE_NAME = os.getenv("SERVICE_NAME", "dashboard")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("LOG_DIR", "")

# Page whose service links get rewritten for the requesting host
TEMPLATE_PATH = os.getenv("TEMPLATE_PATH", str(service_dir / "templates" / "index.html"))
