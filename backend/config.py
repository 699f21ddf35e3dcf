"""Application configuration via environment variables."""

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent

# Database
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite+aiosqlite:///{BASE_DIR / 'floorplan.db'}")

# Server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# CORS
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",")

# Fallback grid for spaces with no stored position (layout units)
GRID_START_X = float(os.getenv("GRID_START_X", "100"))
GRID_START_Y = float(os.getenv("GRID_START_Y", "100"))
GRID_SPACING_X = float(os.getenv("GRID_SPACING_X", "200"))
GRID_SPACING_Y = float(os.getenv("GRID_SPACING_Y", "180"))
GRID_COLUMNS = int(os.getenv("GRID_COLUMNS", "4"))

# Collision resolver pass budget
COLLISION_MAX_ITERATIONS = int(os.getenv("COLLISION_MAX_ITERATIONS", "50"))
