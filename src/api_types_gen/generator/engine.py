"""Inference engine wrapper around the quicktype CLI.

Provides a single callable that turns JSON samples into generated source.
"""

import subprocess
import tempfile
from pathlib import Path
from typing import Protocol

from api_types_gen.errors import EmissionError

DEFAULT_COMMAND = "quicktype"


class InferenceEngine(Protocol):
    def __call__(self, name: str, samples: list[str], lang: str, renderer_options: dict[str, str]) -> str: ...


class QuicktypeEngine:
    """Runs quicktype as a subprocess, one top-level type per call."""

    def __init__(self, command: str | None = None, timeout: float = 120):
        self.command = command or DEFAULT_COMMAND
        self.timeout = timeout

    def __call__(self, name: str, samples: list[str], lang: str, renderer_options: dict[str, str]) -> str:
        with tempfile.TemporaryDirectory() as tmpdir:
            sample_files = []
            for i, sample in enumerate(samples):
                sample_path = Path(tmpdir) / f"{name}-{i}.json"
                sample_path.write_text(sample, encoding="utf-8")
                sample_files.append(str(sample_path))

            args = [self.command, "--lang", lang, "--src-lang", "json", "--top-level", name]
            args.extend(self._render_options(renderer_options))
            args.extend(sample_files)

            try:
                result = subprocess.run(
                    args,
                    capture_output=True,
                    text=True,
                    timeout=self.timeout,
                )
            except FileNotFoundError as e:
                raise EmissionError(f"{self.command} not found; install it with 'npm install -g quicktype'") from e
            except subprocess.TimeoutExpired as e:
                raise EmissionError(f"{self.command} timed out after {self.timeout}s") from e

        if result.returncode != 0:
            message = (result.stderr or result.stdout).strip()
            raise EmissionError(message[:500] or f"{self.command} exited with {result.returncode}")
        return result.stdout

    def _render_options(self, options: dict[str, str]) -> list[str]:
        args = []
        for key, value in options.items():
            if value == "true":
                args.append(f"--{key}")
            else:
                args.extend([f"--{key}", value])
        return args
