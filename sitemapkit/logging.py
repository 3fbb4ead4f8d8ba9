"""
Logger implementations for the sitemap codec.
Each one satisfies the Logger protocol accepted by the generate/parse functions.
"""
import logging
from typing import List, Optional, Tuple


class StandardLogger:
    """Forwards to a stdlib logger under the sitemapkit namespace.

    A handler is only installed when a level is given.
    """

    def __init__(self, logger_name: str = "sitemapkit", level: Optional[str] = None):
        self.logger = logging.getLogger(logger_name)
        if level:
            self.logger.setLevel(getattr(logging, level.upper()))
            if not self.logger.handlers:
                handler = logging.StreamHandler()
                handler.setFormatter(logging.Formatter(
                    '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
                ))
                self.logger.addHandler(handler)

    def info(self, message: str) -> None:
        self.logger.info(message)

    def error(self, message: str) -> None:
        self.logger.error(message)

    def debug(self, message: str) -> None:
        self.logger.debug(message)


class MemoryLogger:
    """Keeps (level, message) pairs in memory, e.g. to report what a batch run produced"""

    def __init__(self):
        self.records: List[Tuple[str, str]] = []

    def info(self, message: str) -> None:
        self.records.append(("INFO", message))

    def error(self, message: str) -> None:
        self.records.append(("ERROR", message))

    def debug(self, message: str) -> None:
        self.records.append(("DEBUG", message))

    def messages(self, level: Optional[str] = None) -> List[str]:
        return [message for record_level, message in self.records
                if level is None or record_level == level.upper()]


class NullLogger:
    """Logger that discards everything"""

    def info(self, message: str) -> None:
        pass

    def error(self, message: str) -> None:
        pass

    def debug(self, message: str) -> None:
        pass


class LoggerFactory:
    """Factory for creating logger instances"""

    @staticmethod
    def create_standard_logger(name: str = "sitemapkit", level: Optional[str] = None) -> StandardLogger:
        return StandardLogger(name, level)

    @staticmethod
    def create_memory_logger() -> MemoryLogger:
        return MemoryLogger()

    @staticmethod
    def create_null_logger() -> NullLogger:
        return NullLogger()

    @staticmethod
    def create(logger_type: str = "null", name: str = "sitemapkit", level: Optional[str] = None):
        """Create a logger by type name: standard, memory or null"""
        if logger_type == "standard":
            return LoggerFactory.create_standard_logger(name, level)
        elif logger_type == "memory":
            return LoggerFactory.create_memory_logger()
        elif logger_type == "null":
            return LoggerFactory.create_null_logger()
        else:
            raise ValueError(f"Unknown logger type: {logger_type}")
