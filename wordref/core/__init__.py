# Core module exports
from wordref.core.config import settings, get_settings, Settings
from wordref.core.database import Base, create_engine, create_session_factory, init_schema
from wordref.core.logging import (
    configure_logging,
    get_logger,
    bind_context,
    clear_context,
    generate_correlation_id,
    lookup_logger,
    cache_logger,
    http_logger,
    input_logger,
)
