"""Policy file helpers for pdum_iam commands."""

from pathlib import Path
from typing import Union

import yaml

from pdum.iam.types import InvalidArgumentError, Policy


def save_policy_file(policy: Policy, path: Union[str, Path]) -> Path:
    """Write a policy to a YAML file in the REST ``Policy`` shape.

    Args:
        policy: The policy to save
        path: Destination file; parent directories are created as needed

    Returns:
        Path to the saved policy file
    """
    policy_file = Path(path)
    policy_file.parent.mkdir(parents=True, exist_ok=True)

    with open(policy_file, "w") as f:
        yaml.safe_dump(policy.to_api_repr(), f, default_flow_style=False, sort_keys=False)

    return policy_file


def load_policy_file(path: Union[str, Path]) -> Policy:
    """Read a policy from a YAML (or JSON) file.

    Args:
        path: File written by :func:`save_policy_file` or by
            ``gcloud ... get-iam-policy --format=yaml``

    Returns:
        The decoded policy

    Raises:
        FileNotFoundError: If the file does not exist
        InvalidArgumentError: If the file is not valid YAML or does not hold a policy mapping
    """
    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise InvalidArgumentError(f"Policy file {path} is not valid YAML: {e}") from e

    if not isinstance(data, dict):
        raise InvalidArgumentError(f"Policy file {path} does not contain a policy mapping")

    return Policy.from_api_repr(data)
