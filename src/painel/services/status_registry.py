"""Fixed, ordered production pipeline with display tags.

Every consumer (board columns, filters, badges, charts) iterates STATUS_OPTIONS
to get pipeline order. Statuses outside the pipeline are shown verbatim with a
neutral color.
"""

from dataclasses import dataclass

from src.painel.models.enums import ProjectStatus

FALLBACK_COLOR = "bg-gray-500"
FALLBACK_ICON = "Circle"


@dataclass(frozen=True)
class StatusOption:
    value: str
    color: str
    icon: str


STATUS_OPTIONS: tuple[StatusOption, ...] = (
    StatusOption(ProjectStatus.RECEBIDO.value, "bg-purple-500", "Inbox"),
    StatusOption(ProjectStatus.CRIANDO_SITE.value, "bg-blue-500", "Code"),
    StatusOption(ProjectStatus.CONFIGURANDO_DOMINIO.value, "bg-amber-500", "Globe"),
    StatusOption(ProjectStatus.AGUARDANDO_DNS.value, "bg-orange-500", "Clock"),
    StatusOption(ProjectStatus.SITE_PRONTO.value, "bg-green-500", "CheckCircle2"),
)

_BY_VALUE = {option.value: option for option in STATUS_OPTIONS}


def status_values() -> list[str]:
    return [option.value for option in STATUS_OPTIONS]


def is_pipeline_status(value: str) -> bool:
    return value in _BY_VALUE


def describe_status(value: str) -> StatusOption:
    """Display tag for a status; unknown values get the neutral fallback, never an error."""
    return _BY_VALUE.get(value) or StatusOption(value, FALLBACK_COLOR, FALLBACK_ICON)
