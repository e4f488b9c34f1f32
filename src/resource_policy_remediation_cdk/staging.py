"""Stage rendered resource-based policies into the function deployment package."""

import shutil
from pathlib import Path
from typing import Iterable

from .exceptions import StagingError
from .logger import get_logger, log_function_call
from .models import PolicyFile, StagedArtifact

logger = get_logger(__name__)

POLICY_FOLDER = "policies"


@log_function_call(logger)
def copy_policies_to_deployment_package(
    policy_files: Iterable[PolicyFile],
    deployment_package_path: Path | str,
) -> StagedArtifact:
    """Copy each rendered policy into ``<deployment_package_path>/policies``.

    Each policy lands as ``<name>.json`` so the remediation function can look
    it up by name. Copies run in order and synchronously; the returned
    artifact is only produced once every copy has finished.

    Args:
        policy_files: Policy descriptors; ``temp_path`` is the file read
        deployment_package_path: Directory packaged as the function code

    Returns:
        StagedArtifact with the resolved directory and the files written

    Raises:
        StagingError: If a source cannot be read or the destination written
    """
    directory = Path(deployment_package_path).resolve()
    policy_folder = directory / POLICY_FOLDER

    try:
        policy_folder.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StagingError(
            "Unable to create policy folder in deployment package",
            destination=str(policy_folder),
            error=str(e),
        ) from e

    staged: list[Path] = []
    for policy in policy_files:
        destination = policy_folder / f"{policy.name}.json"
        try:
            shutil.copyfile(policy.temp_path, destination)
        except OSError as e:
            raise StagingError(
                "Unable to stage policy file",
                policy=policy.name,
                source=str(policy.temp_path),
                destination=str(destination),
            ) from e
        logger.debug("policy_staged", policy=policy.name, destination=str(destination))
        staged.append(destination)

    if not staged:
        logger.warning("no_policies_staged", directory=str(directory))

    return StagedArtifact(directory=directory, policy_files=tuple(staged))


__all__ = ["POLICY_FOLDER", "copy_policies_to_deployment_package"]
