import sys
from pathlib import Path

# Load environment variables FIRST, before any other imports
from dotenv import load_dotenv
load_dotenv()

# Add project root to path (for IDE compatibility when running directly)
project_root = Path(__file__).parent.parent.resolve()
project_root_str = str(project_root)

if sys.path and Path(sys.path[0]).name == 'application':
    sys.path[0] = project_root_str
elif project_root_str not in sys.path:
    sys.path.insert(0, project_root_str)

import logging
import os

from quart import Quart, Response
from quart_schema import QuartSchema

from application.routes import commits_bp, files_bp, repo_bp
from application.routes.common.error_handlers import register_error_handlers
from application.routes.common.response import APIResponse
from application.services.commit_engine.commit_service import get_commit_service

# Configure root logging to both stdout and a file for debugging/triage.
# Default file is app-log.log in the current working directory; override with APP_LOG_FILE.
log_file = os.getenv("APP_LOG_FILE", "app-log.log")
log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logging.basicConfig(
    level=logging.INFO,
    format=log_format,
    handlers=[
        logging.StreamHandler(sys.stdout),
        logging.FileHandler(log_file, mode="a"),
    ],
)

# httpx logs every request at INFO
logging.getLogger("httpx").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


def create_app() -> Quart:
    """Build the Quart application with all blueprints registered."""
    quart_app = Quart(__name__)

    # Staged uploads may carry whole files
    quart_app.config["MAX_CONTENT_LENGTH"] = 100 * 1024 * 1024

    QuartSchema(
        quart_app,
        info={"title": "Remote Commit Engine", "version": "1.0.0"},
        tags=[
            {"name": "Files", "description": "Staging area endpoints"},
            {"name": "Commits", "description": "Batched commit publishing endpoints"},
            {"name": "Repository", "description": "Latest commit and sync from the branch"},
        ],
    )

    register_error_handlers(quart_app)

    quart_app.register_blueprint(files_bp)  # URL prefix already set in blueprint
    quart_app.register_blueprint(commits_bp)  # URL prefix already set in blueprint
    quart_app.register_blueprint(repo_bp)  # URL prefix already set in blueprint

    @quart_app.route("/health", methods=["GET"])
    async def health():
        """Readiness check: reports whether a GitHub token is configured."""
        status = get_commit_service().status()
        return APIResponse.success({"status": "healthy", "git_connected": status["git_connected"]})

    @quart_app.after_request
    async def count_request(response: Response) -> Response:
        get_commit_service().record_request()
        return response

    @quart_app.before_serving
    async def startup() -> None:
        status = get_commit_service().status()
        logger.info(f"Publishing to {status['repo']} on branch '{status['branch']}'")

    return quart_app


app = create_app()
