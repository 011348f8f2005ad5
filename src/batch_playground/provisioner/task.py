import datetime
import re
from typing import Optional

from batch_playground.batch.types import TaskSpec

TASK_TIMESTAMP_FORMAT = "%Y%m%d_%H_%M_%S"


def application_package_variable(application_id: str) -> str:
    """Name of the environment variable the batch service sets to an installed package's directory."""
    return "AZ_BATCH_APP_PACKAGE_" + re.sub(r"[^A-Za-z0-9_]", "_", application_id).upper()


def build_command_line(application_id: str, executable: str, windows: bool) -> str:
    variable = application_package_variable(application_id)
    if windows:
        return f"cmd /c %{variable}%\\{executable}"
    return f'/bin/sh -c "${variable}/{executable}"'


def build_task(
    prefix: str,
    application_id: str,
    executable: str,
    windows: bool,
    now: Optional[datetime.datetime] = None,
) -> TaskSpec:
    now = now or datetime.datetime.now()
    return TaskSpec(
        task_id=f"{prefix}{now.strftime(TASK_TIMESTAMP_FORMAT)}",
        command_line=build_command_line(application_id, executable, windows),
    )
