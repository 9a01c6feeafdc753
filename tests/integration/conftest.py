"""Integration conftest — loads .env so live credentials reach the tests."""
from dotenv import load_dotenv

load_dotenv()
