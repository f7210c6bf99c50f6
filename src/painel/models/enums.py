"""Shared enums for models."""

from enum import Enum


class ProjectStatus(str, Enum):
    """Production pipeline, in pipeline order."""

    RECEBIDO = "Recebido"
    CRIANDO_SITE = "Criando site"
    CONFIGURANDO_DOMINIO = "Configurando Domínio"
    AGUARDANDO_DNS = "Aguardando DNS"
    SITE_PRONTO = "Site pronto"


# Written by the customization tracker; outside the pipeline columns.
EM_CUSTOMIZACAO = "Em Customização"


class CustomizationStatus(str, Enum):
    SOLICITADO = "Solicitado"
    EM_ANDAMENTO = "Em andamento"
    CONCLUIDO = "Concluído"
    CANCELADO = "Cancelado"


class CustomizationPriority(str, Enum):
    BAIXA = "Baixa"
    MEDIA = "Média"
    ALTA = "Alta"
    URGENTE = "Urgente"


class ClientType(str, Enum):
    PARCEIRO = "parceiro"
    CLIENTE_FINAL = "cliente_final"


class NotificationType(str, Enum):
    INFO = "info"
    WARNING = "warning"
    SUCCESS = "success"
    ERROR = "error"
