from dotenv import load_dotenv


def pytest_configure(config):
    """Load OSHI_* settings (e.g. OSHI_INTEGRATION, OSHI_ENDPOINT) from a local .env file."""
    load_dotenv()
