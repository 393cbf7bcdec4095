"""Batch generation pipeline.

Validated endpoint specs are fetched under bounded concurrency, successful
payloads go through type emission, outputs are persisted, and every
endpoint's fate is reduced into GenerationStatistics.
"""

import os
from pathlib import Path

from api_types_gen.constants import FORMAT_EXTENSIONS
from api_types_gen.errors import PersistenceError, ValidationError
from api_types_gen.fetch.client import ApiClient
from api_types_gen.fetch.scheduler import BatchScheduler
from api_types_gen.generator.emitter import TypeEmitter, resolve_format
from api_types_gen.generator.engine import InferenceEngine
from api_types_gen.generator.templates import TemplateRenderer
from api_types_gen.notify import ClickNotifier, Notifier
from api_types_gen.spec.base import EndpointSpec, GenerationResult, GenerationStatistics, RunOptions
from api_types_gen.spec.loader import load_config
from api_types_gen.spec.validator import validate_name, validate_url


class ApiTypesGenerator:
    """Generates one type file per endpoint plus index and usage-example files."""

    def __init__(
        self,
        options: RunOptions,
        notifier: Notifier | None = None,
        engine: InferenceEngine | None = None,
        client: ApiClient | None = None,
        scheduler: BatchScheduler | None = None,
    ):
        # Unknown formats fail here, before any network call.
        self.format = resolve_format(options.format)
        self.options = options
        self.notifier = notifier or ClickNotifier(quiet=options.quiet)
        self.client = client or ApiClient(timeout=options.timeout)
        self.scheduler = scheduler or BatchScheduler(
            self.client.fetch,
            concurrency=options.concurrency,
            retries=options.retries,
            retry_delay_ms=options.retry_delay_ms,
            notifier=self.notifier,
        )
        self.emitter = TypeEmitter(self.format, options.runtime_check, engine)
        self.templates = TemplateRenderer(self.format)
        self.extension = FORMAT_EXTENSIONS[self.format]
        self.output_dir = Path(options.output_dir)

    def generate_from_config(self, config_path: Path | str) -> GenerationStatistics:
        """Load endpoint specs from a config file and generate types for them."""
        return self.generate(load_config(config_path))

    def generate(self, specs: list[EndpointSpec]) -> GenerationStatistics:
        """Run the full pipeline over specs and return the run statistics."""
        self.notifier.info(f"Generating types for {len(specs)} endpoint(s)")
        results: dict[int, GenerationResult] = {}

        # Step 0: Output directory must be usable before any request is sent
        self._prepare_output_dir()

        # Step 1: Validate
        valid: dict[str, int] = {}
        valid_specs = []
        for index, spec in enumerate(specs):
            try:
                normalized = self._validate(spec, valid)
            except ValidationError as e:
                self.notifier.error(f"{spec.name}: validation failed: {e}")
                results[index] = GenerationResult(name=spec.name, success=False, error=str(e))
                continue
            valid[normalized] = index
            valid_specs.append(spec.model_copy(update={"name": normalized}))

        # Step 2: Fetch
        samples: dict[str, str] = {}
        if valid_specs:
            self.notifier.info(f"Fetching {len(valid_specs)} endpoint(s), concurrency {self.options.concurrency}")
            for outcome in self.scheduler.run_all(valid_specs):
                index = valid[outcome.spec.name]
                if outcome.ok:
                    samples[outcome.spec.name] = outcome.payload
                else:
                    error = outcome.error.removeprefix(f"{outcome.spec.name} ")
                    self.notifier.error(f"{outcome.spec.name}: {error}")
                    results[index] = GenerationResult(name=outcome.spec.name, success=False, error=error)

        # Step 3: Emit
        if samples:
            self.notifier.info(f"Generating {self.format} types for {len(samples)} endpoint(s)")
            report = self.emitter.emit_all(samples)
            for name, error in report.errors.items():
                self.notifier.error(f"{name}: type generation failed: {error}")
                results[valid[name]] = GenerationResult(name=name, success=False, error=error)
            if not report.ok:
                self.notifier.warning(report.summary())

            # Step 4: Persist
            if report.outputs:
                paths = self._write_outputs(report.outputs)
                for name, path in paths.items():
                    results[valid[name]] = GenerationResult(name=name, success=True, file_path=str(path))

        statistics = build_statistics(len(specs), [results[i] for i in sorted(results)], self.output_dir)
        self._report(statistics)
        return statistics

    def _validate(self, spec: EndpointSpec, seen: dict[str, int]) -> str:
        normalized = validate_name(spec.name)
        validate_url(spec.url)
        if normalized in seen:
            raise ValidationError(f"duplicate name {normalized!r}")
        return normalized

    def _prepare_output_dir(self) -> None:
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PersistenceError(f"Output directory {self.output_dir} is not usable: {e}") from e
        if not os.access(self.output_dir, os.W_OK):
            raise PersistenceError(f"Output directory {self.output_dir} is not writable")

    def _write_outputs(self, outputs: dict[str, str]) -> dict[str, Path]:
        paths = {}
        try:
            for name, content in outputs.items():
                path = (self.output_dir / f"{name}.{self.extension}").resolve()
                path.write_text(content, encoding="utf-8")
                paths[name] = path
                self.notifier.success(f"Created {path}")

            names = list(outputs)
            index_path = self.output_dir / f"index.{self.extension}"
            index_path.write_text(self.templates.render_index(names), encoding="utf-8")
            self.notifier.success(f"Created {index_path}")

            usage_path = self.output_dir / f"usage-example.{self.extension}"
            usage_path.write_text(self.templates.render_usage_example(names), encoding="utf-8")
            self.notifier.success(f"Created {usage_path}")
        except OSError as e:
            raise PersistenceError(f"Failed to write generated files to {self.output_dir}: {e}") from e
        return paths

    def _report(self, stats: GenerationStatistics) -> None:
        if stats.successful:
            self.notifier.success(f"Generated {stats.successful} type file(s) in {stats.output_dir}")
        if stats.failed:
            self.notifier.error(f"{stats.failed} endpoint(s) failed")
            for error in stats.errors:
                self.notifier.error(f"  - {error}")


def build_statistics(total: int, results: list[GenerationResult], output_dir: Path | str) -> GenerationStatistics:
    """Reduce per-endpoint results into run statistics."""
    successful = sum(1 for r in results if r.success)
    errors = [f"{r.name}: {r.error}" for r in results if not r.success]
    return GenerationStatistics(
        total=total,
        successful=successful,
        failed=total - successful,
        errors=errors,
        output_dir=str(Path(output_dir).resolve()),
    )
