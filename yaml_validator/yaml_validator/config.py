# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Runtime configuration for the YAML validator."""

import logging
import os
import sys
from dataclasses import dataclass
from typing import Optional, TextIO

ENV_PREFIX = "YAML_VALIDATOR_"


class _BelowLevelFilter(logging.Filter):
    def __init__(self, level: int) -> None:
        super().__init__()
        self._level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self._level


@dataclass
class ValidatorConfig:
    """Configuration read from the environment."""
    log_level: str = "WARNING"
    print_level: str = "WARNING"
    cache_enabled: bool = False

    @classmethod
    def from_env(cls) -> "ValidatorConfig":
        """Create configuration from environment variables."""
        return cls(
            log_level=os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "WARNING"),
            print_level=os.getenv(f"{ENV_PREFIX}PRINT_LEVEL", "WARNING"),
            cache_enabled=os.getenv(f"{ENV_PREFIX}CACHE_ENABLED", "false").lower() == "true",
        )

    def set_logging(
        self,
        verbose: bool = False,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ) -> logging.Logger:
        """Setup root logging based on configuration.

        Records below ``print_level`` go to stdout, the rest to stderr.
        ``verbose`` lowers the log level to DEBUG regardless of the environment.
        """
        level = logging.DEBUG if verbose else getattr(logging, self.log_level.upper(), logging.WARNING)
        stderr_level = max(getattr(logging, self.print_level.upper(), logging.WARNING), logging.DEBUG)
        formatter = logging.Formatter("%(name)s - %(levelname)s - %(message)s")

        stdout_handler = logging.StreamHandler(stream=stdout or sys.stdout)
        stdout_handler.addFilter(_BelowLevelFilter(stderr_level))
        stderr_handler = logging.StreamHandler(stream=stderr or sys.stderr)
        stderr_handler.setLevel(stderr_level)

        root = logging.getLogger()
        root.handlers.clear()
        root.setLevel(level)
        for handler in (stdout_handler, stderr_handler):
            handler.setFormatter(formatter)
            root.addHandler(handler)

        return logging.getLogger("yaml_validator")


# Global configuration instance
validator_config = ValidatorConfig.from_env()
