import landgen
from typing import List, Union


def log_params(name, params):
    landgen.logger.info(
        f"Received parameters: \n{name}\n  "
        + "\n  ".join(f"--{k}={v}" for k, v in params.items())
    )


def to_list(value: Union[str, List[str], tuple, None]) -> List[str]:
    """Comma-separated string (or a list parsed by fire) to a list of strings"""
    if value is None:
        return None
    if isinstance(value, str):
        return [v for v in value.split(",") if len(v) > 0]
    return [str(v) for v in value]
