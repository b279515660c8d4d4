"""
Rules port adapter.

Exposes the loaded rules.yaml to components through their rules ports
(CodecRulesPort, FileRulesPort).
"""

from __future__ import annotations

from vehicle_manager.rules.models import Rules


class RulesPortAdapter:
    def __init__(self, rules: Rules) -> None:
        self._rules = rules

    def table_name(self) -> str:
        return self._rules.codec.table_name

    def warn_on_unsafe_strings(self) -> bool:
        return self._rules.codec.warn_on_unsafe_strings

    def allowed_extensions(self) -> list[str]:
        return list(self._rules.files.allowed_extensions)

    def export_filename(self) -> str:
        return self._rules.files.export_filename

    def encoding(self) -> str:
        return self._rules.files.encoding

    def max_input_bytes(self) -> int:
        return self._rules.files.max_input_bytes
