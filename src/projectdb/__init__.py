import logging as module_logging

import projectdb.logging as application_logging

application_logging.configure()
logger = module_logging.getLogger(__name__)

__project__ = "projectdb-api"
__version__ = "2026.1.0"

logger.info(f"ProjectDB {__version__}")
