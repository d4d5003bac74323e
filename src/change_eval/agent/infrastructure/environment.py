"""Host environment facts recorded in agent logs and results bundles."""

import platform
import sys
from datetime import UTC, datetime

from change_eval.agent.domain.log import EnvironmentInfo
from change_eval.core.version import TOOL_VERSION


def utc_now() -> str:
    return datetime.now(UTC).isoformat()


def describe_environment(working_directory: str) -> EnvironmentInfo:
    return EnvironmentInfo(
        os=f"{platform.system()} {platform.release()}".strip(),
        python_version=sys.version.split()[0],
        tool_version=TOOL_VERSION,
        working_directory=working_directory,
    )
