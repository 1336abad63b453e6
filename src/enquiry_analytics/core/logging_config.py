import logging
import sys

from .config import LOG_LEVEL


class NamespaceFilter(logging.Filter):
    def __init__(self, allowed_namespaces=None):
        super().__init__()
        self.allowed_namespaces = allowed_namespaces if allowed_namespaces is not None else []

    def filter(self, record):
        if not self.allowed_namespaces:
            return True # If no namespaces are specified, allow all records
        return any(record.name.startswith(ns) for ns in self.allowed_namespaces)


log_formatter = logging.Formatter(
    fmt="%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

app_logger = logging.getLogger("enquiry_analytics")
app_logger.setLevel(LOG_LEVEL)

console_handler = logging.StreamHandler(sys.stdout)
console_handler.setFormatter(log_formatter)

# To only see logs from the report layer, for example:
#
# namespace_filter = NamespaceFilter(["enquiry_analytics.features.reports"])
# console_handler.addFilter(namespace_filter)
if not app_logger.handlers:
    app_logger.addHandler(console_handler)


def configure_feature_levels(level: str) -> None:
    """Opens up the store's pipeline dumps when running at DEBUG.

    At any other level the feature loggers inherit from ``app_logger``.
    """
    if level == "DEBUG":
        logging.getLogger("enquiry_analytics.features.enquiries").setLevel(logging.DEBUG)


configure_feature_levels(LOG_LEVEL)

# The driver has its own loggers under "pymongo"; uncomment to trace commands
# logging.getLogger("pymongo.command").setLevel(logging.DEBUG)
