import uvicorn

from spending_dashboard.app import app
from spending_dashboard.logger import get_logging_config


def run(host: str = "0.0.0.0", port: int = 8000) -> None:
    uvicorn.run(app, host=host, port=port, log_config=get_logging_config())


if __name__ == "__main__":
    run()
