"""Deep merge logic for configuration files."""


def deep_merge(base: dict, override: dict) -> dict:
    """
    Deep merge two dictionaries. Override wins on conflicts.

    Args:
        base: Base configuration
        override: Configuration to merge on top

    Returns:
        New merged dictionary

    Example:
        base = {"secrets": {"backend": "aws", "region": "us-east-1"}}
        override = {"secrets": {"region": "sa-east-1"}}
        result = {"secrets": {"backend": "aws", "region": "sa-east-1"}}
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result
