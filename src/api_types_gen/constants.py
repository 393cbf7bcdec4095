"""Static lookup tables shared across the pipeline."""

from types import MappingProxyType

VERSION = "1.0.0"
USER_AGENT = f"api-types-gen/{VERSION}"

HTTP_METHODS = ("GET", "POST", "PUT", "DELETE")

MAX_NAME_LENGTH = 100
SAMPLE_SIZE = 3

SUPPORTED_FORMATS = ("typescript", "typescript-zod", "typescript-effect-schema")

FORMAT_ALIASES = MappingProxyType({
    "typescript": "typescript",
    "ts": "typescript",
    "typescript-zod": "typescript-zod",
    "zod": "typescript-zod",
    "typescript-effect-schema": "typescript-effect-schema",
    "effect": "typescript-effect-schema",
    "effect-schema": "typescript-effect-schema",
})

# File extension written for each canonical format.
FORMAT_EXTENSIONS = MappingProxyType({
    "typescript": "ts",
    "typescript-zod": "ts",
    "typescript-effect-schema": "ts",
})

TYPESCRIPT_KEYWORDS = frozenset({
    "abstract", "any", "as", "asserts", "bigint", "boolean", "break", "case",
    "catch", "class", "const", "constructor", "continue", "debugger", "declare",
    "default", "delete", "do", "else", "enum", "export", "extends", "false",
    "finally", "for", "from", "function", "get", "if", "implements", "import",
    "in", "infer", "instanceof", "interface", "is", "keyof", "let", "module",
    "namespace", "never", "new", "null", "number", "object", "package",
    "private", "protected", "public", "readonly", "require", "return", "set",
    "static", "string", "super", "switch", "symbol", "this", "throw", "true",
    "try", "type", "typeof", "undefined", "unique", "unknown", "var", "void",
    "while", "with", "yield",
})

COMMON_ABBREVIATIONS = MappingProxyType({
    "api": "API",
    "xml": "XML",
    "html": "HTML",
    "css": "CSS",
    "json": "JSON",
    "url": "URL",
    "uri": "URI",
    "http": "HTTP",
    "https": "HTTPS",
    "id": "ID",
    "uuid": "UUID",
    "sql": "SQL",
    "db": "DB",
    "ui": "UI",
    "ux": "UX",
    "io": "IO",
    "os": "OS",
    "cpu": "CPU",
    "gpu": "GPU",
    "ram": "RAM",
    "ssd": "SSD",
    "hdd": "HDD",
    "pdf": "PDF",
    "zip": "ZIP",
    "csv": "CSV",
    "md5": "MD5",
    "sha": "SHA",
    "jwt": "JWT",
    "oauth": "OAuth",
    "cors": "CORS",
    "csrf": "CSRF",
    "xss": "XSS",
})
