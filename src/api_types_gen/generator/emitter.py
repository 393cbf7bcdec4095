"""Type emission stage: turns fetched JSON samples into generated source."""

from dataclasses import dataclass, field

from api_types_gen.constants import FORMAT_ALIASES, SUPPORTED_FORMATS
from api_types_gen.errors import EmissionError, FormatError
from api_types_gen.generator.engine import InferenceEngine, QuicktypeEngine


def resolve_format(fmt: str) -> str:
    """Map a format name or alias to its canonical format.

    Raises FormatError listing the canonical formats for unknown names.
    """
    canonical = FORMAT_ALIASES.get(fmt.strip().lower())
    if canonical is None:
        raise FormatError(f"Unsupported format: {fmt!r}. Supported formats: {', '.join(SUPPORTED_FORMATS)}")
    return canonical


@dataclass
class EmissionReport:
    """Outputs and per-endpoint failures of one emission pass."""

    outputs: dict[str, str] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    def summary(self) -> str:
        failed = ", ".join(self.errors)
        return f"Type generation failed for {len(self.errors)} endpoint(s): {failed}"


class TypeEmitter:
    """Generates type source for fetched samples using an inference engine."""

    def __init__(self, fmt: str = "typescript", runtime_check: bool = False, engine: InferenceEngine | None = None):
        self.format = resolve_format(fmt)
        self.runtime_check = runtime_check
        self.engine = engine or QuicktypeEngine()

    def emit(self, name: str, sample: str) -> str:
        """Generate source for a single endpoint sample."""
        renderer_options = {}
        if self.runtime_check:
            renderer_options["runtime-typecheck"] = "true"
        try:
            return self.engine(name, [sample], self.format, renderer_options)
        except EmissionError:
            raise
        except Exception as e:  # pylint: disable=broad-exception-caught
            raise EmissionError(str(e)) from e

    def emit_all(self, samples: dict[str, str]) -> EmissionReport:
        """Emit every sample in order, collecting failures instead of stopping."""
        report = EmissionReport()
        for name, sample in samples.items():
            try:
                report.outputs[name] = self.emit(name, sample)
            except EmissionError as e:
                report.errors[name] = str(e)
        return report
