# tests/conftest.py
"""
Test environment: point the app at a throwaway SQLite file before any
guardiao module reads its settings, and keep the AI collaborator disabled.
"""

import os
import sys
import tempfile

ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, ROOT_DIR)

TEST_DB_DIR = tempfile.mkdtemp(prefix="guardiao_test_")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(TEST_DB_DIR, 'guardiao_test.db')}"
os.environ["GOOGLE_API_KEY"] = ""
os.environ["API_KEY"] = ""
