"""Pytest configuration and fixtures."""

import os
import sys
from pathlib import Path

# Add project root to sys.path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

# Offline backends for anything that bootstraps from the environment
os.environ.setdefault("ORACLE_BACKEND", "stub")
os.environ.setdefault("INCIDENT_STORE_BACKEND", "memory")
os.environ.setdefault("DELIVERY_BACKEND", "log")
