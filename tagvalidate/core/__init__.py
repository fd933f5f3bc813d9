# Core module exports
from tagvalidate.core.config import settings, get_settings
from tagvalidate.core.logging import (
    configure_logging,
    configure_default_logging,
    get_logger,
    bind_context,
    unbind_context,
    validation_logger,
    dispatch_logger,
)
