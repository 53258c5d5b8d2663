"""
Prompt Manager - Loads and manages JSON-based prompt configurations
Explanation prompts live in prompts/configs/ as data, not code
"""

import json
import re
from pathlib import Path
from typing import Dict, Any, Optional
from functools import lru_cache


REQUIRED_FIELDS = ('prompt_template',)


class PromptManager:
    """
    Manages loading and formatting of prompt configurations from JSON files

    Features:
    - Cached loading
    - Template variable injection
    - Validation of required fields and template variables
    """

    def __init__(self, configs_dir: Optional[Path] = None):
        """
        Initialize PromptManager

        Args:
            configs_dir: Path to directory containing JSON prompt configs
                        Defaults to disruption_helper/prompts/configs/
        """
        if configs_dir is None:
            self.configs_dir = Path(__file__).parent / "configs"
        else:
            self.configs_dir = Path(configs_dir)

        if not self.configs_dir.exists():
            raise FileNotFoundError(f"Prompts config directory not found: {self.configs_dir}")

    @lru_cache(maxsize=10)
    def load_config(self, config_name: str) -> Dict[str, Any]:
        """
        Load a prompt configuration from JSON file

        Args:
            config_name: Name of config file without .json extension
                        (e.g., 'explanation_verified')

        Returns:
            Dictionary containing prompt configuration

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If JSON is invalid or required fields are missing
        """
        config_path = self.configs_dir / f"{config_name}.json"

        if not config_path.exists():
            raise FileNotFoundError(f"Prompt config not found: {config_path}")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {config_path}: {str(e)}")

        for field in REQUIRED_FIELDS:
            if field not in config:
                raise ValueError(f"Missing required field '{field}' in {config_name}.json")

        return config

    def format_prompt(self, config_name: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        """
        Load config and inject variables into prompt template

        Args:
            config_name: Name of the prompt configuration
            variables: Dictionary of variables to inject into template

        Returns:
            Dictionary with formatted prompt and model parameters

        Example:
            manager = PromptManager()
            prompt_data = manager.format_prompt(
                'explanation_verified',
                {'airline': 'Iberia', 'delay_minutes': 200, ...}
            )
        """
        config = self.load_config(config_name)
        template = config['prompt_template']

        safe_variables = {
            key: str(value) if value is not None else "N/A"
            for key, value in variables.items()
        }

        try:
            formatted_prompt = template.format(**safe_variables)
        except KeyError as e:
            raise ValueError(f"Missing required variable {e} for prompt '{config_name}'")

        return {
            'prompt': formatted_prompt,
            'system_instruction': config.get('system_instruction', ''),
            'model_name': config.get('model_name'),
            'parameters': config.get('parameters', {})
        }

    def validate_variables(self, config_name: str, variables: Dict[str, Any]) -> tuple[bool, list[str]]:
        """
        Validate that all required template variables are provided

        Returns:
            Tuple of (is_valid, list_of_missing_variables)
        """
        template = self.load_config(config_name)['prompt_template']
        required_vars = set(re.findall(r'\{(\w+)\}', template))
        missing_vars = required_vars - set(variables.keys())
        return (len(missing_vars) == 0, sorted(missing_vars))
