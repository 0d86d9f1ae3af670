"""Java source rendering for a GeneratedModel (one POJO per table)."""
from models.generated import GeneratedModel

_INDENT = "    "


def _simple_name(java_type: str) -> str:
    return java_type.rsplit(".", 1)[-1]


def _accessor_suffix(field_name: str) -> str:
    return field_name[:1].upper() + field_name[1:]


def collect_imports(model: GeneratedModel) -> list[str]:
    """Distinct java.* types used by the fields, sorted."""
    return sorted({f.type for f in model.fields if f.type.startswith("java.")})


def render_java_source(model: GeneratedModel, package: str = "com.example.models") -> str:
    lines: list[str] = [f"package {package};", ""]

    lines.append("import java.io.Serializable;")
    lines.extend(f"import {imp};" for imp in collect_imports(model))
    lines.append("")

    lines += [
        "/**",
        f" * Auto-generated model class for table: {model.table_name}",
        " */",
        f"public class {model.class_name} implements Serializable {{",
        f"{_INDENT}private static final long serialVersionUID = 1L;",
        "",
    ]

    for f in model.fields:
        lines.append(f"{_INDENT}private {_simple_name(f.type)} {f.name};")
    lines.append("")

    lines += [
        f"{_INDENT}public {model.class_name}() {{",
        f"{_INDENT}}}",
        "",
    ]

    for f in model.fields:
        java_type = _simple_name(f.type)
        suffix = _accessor_suffix(f.name)
        lines += [
            f"{_INDENT}public {java_type} get{suffix}() {{",
            f"{_INDENT * 2}return this.{f.name};",
            f"{_INDENT}}}",
            "",
            f"{_INDENT}public void set{suffix}({java_type} {f.name}) {{",
            f"{_INDENT * 2}this.{f.name} = {f.name};",
            f"{_INDENT}}}",
            "",
        ]

    lines.append("}")
    return "\n".join(lines) + "\n"
