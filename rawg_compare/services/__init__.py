"""Service layer for business logic and external integrations."""

from .config import ConfigurationService
from .errors import (
    AppError,
    ConfigurationError,
    DecodeError,
    ErrorCategory,
    ErrorHandlingService,
    ErrorSeverity,
    NetworkError,
    UserFriendlyError,
    describe_http_error,
    get_error_service,
    handle_error,
)
from .http_client import HttpClientService
from .rawg_client import RawgClient, parse_game_record, parse_search_result
from .similarity import compare_games, enhanced_similarity, jaccard_index, weighted_score

__all__ = [
    "AppError",
    "ConfigurationError",
    "ConfigurationService",
    "DecodeError",
    "ErrorCategory",
    "ErrorHandlingService",
    "ErrorSeverity",
    "HttpClientService",
    "NetworkError",
    "RawgClient",
    "UserFriendlyError",
    "compare_games",
    "describe_http_error",
    "enhanced_similarity",
    "get_error_service",
    "handle_error",
    "jaccard_index",
    "parse_game_record",
    "parse_search_result",
    "weighted_score",
]
