"""Application configuration for the DWARF v1 importer."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv


@dataclass
class Config:
    """Configuration for one import run."""

    elf_file_path: Path
    output_dir: Path
    verbose: bool = False
    log_dir: Path | None = field(default_factory=lambda: Path("logs"))

    @classmethod
    def from_env(cls, env_path: Path | None = None) -> "Config":
        """
        Load configuration from environment variables or a .env file.

        Args:
            env_path: Optional path to .env file (defaults to .env in current directory)

        Returns:
            Config object
        """
        if env_path is None:
            env_path = Path.cwd() / ".env"

        if env_path.exists():
            load_dotenv(env_path)

        elf_file_path = Path(os.getenv("ELF_FILE_PATH", "program.elf"))
        output_dir = Path(os.getenv("OUTPUT_DIR", "output"))
        verbose = os.getenv("VERBOSE", "false").lower() in ("true", "1", "yes")
        log_dir_str = os.getenv("LOG_DIR", "logs")
        log_dir = Path(log_dir_str) if log_dir_str else None

        return cls(
            elf_file_path=elf_file_path,
            output_dir=output_dir,
            verbose=verbose,
            log_dir=log_dir,
        )

    @classmethod
    def from_args(
        cls,
        elf_file_path: Path | None = None,
        output_dir: Path | None = None,
        verbose: bool | None = None,
    ) -> "Config":
        """
        Create configuration from explicit arguments, falling back to environment.

        Args:
            elf_file_path: Path to ELF file (overrides env)
            output_dir: Output directory (overrides env)
            verbose: Enable verbose output (overrides env)

        Returns:
            Config object
        """
        config = cls.from_env()

        if elf_file_path is not None:
            config.elf_file_path = elf_file_path
        if output_dir is not None:
            config.output_dir = output_dir
        if verbose is not None:
            config.verbose = verbose

        return config

    def validate(self) -> None:
        """
        Validate the configuration.

        Raises:
            ValueError: If configuration is invalid
        """
        if not self.elf_file_path.exists():
            raise ValueError(f"ELF file not found: {self.elf_file_path}")

        if not self.elf_file_path.is_file():
            raise ValueError(f"Not a file: {self.elf_file_path}")

    def ensure_output_dir(self) -> None:
        """Create the output directory if it doesn't exist."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
