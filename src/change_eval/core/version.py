"""Package version reported in results bundles and agent logs."""

TOOL_VERSION = "0.1.0"
