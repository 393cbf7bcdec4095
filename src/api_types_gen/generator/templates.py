"""Renders the auxiliary index and usage-example files."""

from datetime import datetime, timezone


class TemplateRenderer:
    """Builds index/usage files from the list of generated type names."""

    def __init__(self, fmt: str = "typescript"):
        self.format = fmt

    def render_index(self, names: list[str]) -> str:
        lines = [
            "// Auto-generated type index",
            f"// Generated at: {datetime.now(timezone.utc).isoformat(timespec='seconds')}",
            "",
        ]
        for name in names:
            if self.format == "typescript":
                lines.append(f"export {{ Convert as {name}Convert }} from './{name}';")
                lines.append(f"export type {{ {name} }} from './{name}';")
            else:
                lines.append(f"export * from './{name}';")
        return "\n".join(lines) + "\n"

    def render_usage_example(self, names: list[str]) -> str:
        lines = ["// Usage examples for the generated API types", ""]
        if not names:
            return "\n".join(lines)

        first = names[0]
        if self.format == "typescript":
            for name in names[:2]:
                lines.append(f"import {{ Convert as {name}Convert, {name} }} from './{name}';")
            lines.extend([
                "",
                f"export async function fetch{first}(url: string): Promise<{first} | null> {{",
                "  try {",
                "    const response = await fetch(url);",
                "    const jsonText = await response.text();",
                f"    return {first}Convert.to{first}(jsonText);",
                "  } catch (error) {",
                "    console.error('Failed to parse response:', error);",
                "    return null;",
                "  }",
                "}",
                "",
            ])
        else:
            lines.extend([
                f"import * as {first}Module from './{first}';",
                "",
                f"export async function fetch{first}(url: string): Promise<unknown> {{",
                "  const response = await fetch(url);",
                "  const data = await response.json();",
                f"  // Validate `data` with the schema exported from {first}Module.",
                f"  console.log(Object.keys({first}Module));",
                "  return data;",
                "}",
                "",
            ])
        lines.extend(self._render_batch_example())
        return "\n".join(lines)

    def _render_batch_example(self) -> list[str]:
        return [
            "export function safeBatchParse<T>(jsonList: string[], converter: (json: string) => T): T[] {",
            "  const results: T[] = [];",
            "  jsonList.forEach((json, index) => {",
            "    try {",
            "      results.push(converter(json));",
            "    } catch (error) {",
            "      console.warn(`Item ${index + 1} failed to parse:`, error);",
            "    }",
            "  });",
            "  return results;",
            "}",
            "",
        ]
