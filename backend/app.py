from fms_backend import create_app
from dotenv import load_dotenv
import logging

# Load environment variables from .env file
load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger("fms_backend.app")

app = create_app()


def main() -> None:
    port = app.config.get("PORT", 8888)
    log.info("Server listening on port %s", port)
    app.run(host="0.0.0.0", port=port, debug=False)


if __name__ == "__main__":
    main()
