import copy
import json
import os
import re
from typing import Dict, Any, Optional
from dotenv import load_dotenv
from jsonschema import validate, ValidationError, SchemaError

from .algorithms import DEFAULT_PREFIX_LENGTH, MAX_PREFIX_LENGTH
from .corpus import default_cases


DEFAULT_OUTPUT = 'results/bench.csv'

BENCH_DEFAULTS = {
    "prefix_length": int(DEFAULT_PREFIX_LENGTH),
    "sample_size": 100,
    "iterations": 1000,
    "warmup": 10,
    "compare_rapidfuzz": True,
    "generate_summary": False,
}

BENCH_CONFIG_SCHEMA = {
    "type": "object",
    "required": ["output"],
    "additionalProperties": False,
    "properties": {
        "output": {
            "type": "string",
            "minLength": 1
        },
        "prefix_length": {
            "type": "integer",
            "minimum": 1,
            "maximum": MAX_PREFIX_LENGTH
        },
        "sample_size": {
            "type": "integer",
            "minimum": 1
        },
        "iterations": {
            "type": "integer",
            "minimum": 1
        },
        "warmup": {
            "type": "integer",
            "minimum": 0
        },
        "compare_rapidfuzz": {
            "type": "boolean"
        },
        "generate_summary": {
            "type": "boolean"
        },
        "cases": {
            "type": "array",
            "minItems": 1,
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string", "minLength": 1},
                    "query": {"type": "string"},
                    "target": {"type": "string"}
                },
                "required": ["name", "query", "target"]
            }
        }
    }
}


def validate_config(config_path: str, env_file: Optional[str] = None) -> Dict[str, Any]:
    """
    Validate a benchmark JSON configuration file and resolve environment variable references.

    Args:
        config_path: Path to JSON configuration file
        env_file: Optional path to .env file (defaults to .env in current directory)

    Returns:
        Validated configuration dictionary with defaults applied

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config is invalid
    """
    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in configuration file: {str(e)}")

    return validate_config_dict(config, env_file=env_file)


def validate_config_dict(config: Dict[str, Any], env_file: Optional[str] = None) -> Dict[str, Any]:
    """
    Validate a benchmark configuration dictionary and resolve environment variables.

    Args:
        config: Configuration dictionary
        env_file: Optional path to .env file (defaults to .env in current directory)

    Returns:
        A new configuration dictionary with defaults applied

    Raises:
        ValueError: If configuration is invalid
    """
    if not isinstance(config, dict):
        raise ValueError("Configuration must be a JSON object")

    if env_file is None:
        env_file = '.env'
    if os.path.exists(env_file):
        load_dotenv(env_file)

    config = _resolve_env_vars(copy.deepcopy(config))

    try:
        validate(instance=config, schema=BENCH_CONFIG_SCHEMA)
    except ValidationError as e:
        error_path = '.'.join(str(p) for p in e.path)
        raise ValueError(
            f"Configuration validation error at '{error_path}': {e.message}\n"
            f"Suggested fix: {_get_validation_suggestion(e)}"
        )
    except SchemaError as e:
        raise ValueError(f"Configuration schema error: {str(e)}")

    names = [case['name'] for case in config.get('cases', [])]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise ValueError(f"Duplicate benchmark case names: {', '.join(duplicates)}")

    for key, value in BENCH_DEFAULTS.items():
        config.setdefault(key, value)
    if 'cases' not in config:
        config['cases'] = default_cases()

    _prepare_output_dir(config['output'])

    return config


def default_config(output: str = DEFAULT_OUTPUT) -> Dict[str, Any]:
    """Configuration used when the benchmark runs without a config file."""
    return validate_config_dict({'output': output})


def _prepare_output_dir(output: str):
    """Create the output directory if it doesn't exist."""
    output_dir = os.path.dirname(output)
    if output_dir and not os.path.exists(output_dir):
        os.makedirs(output_dir, exist_ok=True)


def _resolve_env_vars(obj: Any) -> Any:
    """
    Recursively resolve environment variable references in config.
    Supports ${VAR_NAME} or ${VAR_NAME:default_value} syntax.
    """
    if isinstance(obj, dict):
        return {key: _resolve_env_vars(value) for key, value in obj.items()}
    elif isinstance(obj, list):
        return [_resolve_env_vars(item) for item in obj]
    elif isinstance(obj, str):
        pattern = r'\$\{([^}:]+)(?::([^}]*))?\}'

        def replace_env_var(match):
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else None
            env_value = os.getenv(var_name)

            if env_value is not None:
                return env_value
            elif default_value is not None:
                return default_value
            else:
                raise ValueError(
                    f"Environment variable '{var_name}' not found and no default value provided. "
                    f"Set it in your .env file or environment."
                )

        if re.search(pattern, obj):
            return re.sub(pattern, replace_env_var, obj)
        return obj
    else:
        return obj


def _get_validation_suggestion(error: ValidationError) -> str:
    """Generate helpful suggestion based on validation error."""
    error_path = '.'.join(str(p) for p in error.path)
    message = error.message.lower()

    if 'required' in message:
        missing_field = error_path.split('.')[-1] if error_path else 'field'
        return f"Add missing required field: {missing_field}"

    if 'additional properties' in message:
        return "Remove unknown keys; allowed keys are: " + ', '.join(sorted(BENCH_CONFIG_SCHEMA['properties']))

    if 'type' in message:
        return f"Check that {error_path} has the correct data type"

    if 'minimum' in message or 'maximum' in message:
        return f"Check that {error_path} is within the allowed range"

    return "Review the configuration structure and ensure all required fields are present"
