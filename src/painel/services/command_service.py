"""Text commands handed to the site production team.

The site command briefs the builder with everything known about a project;
when the project came from a personalization submission the brief includes
that submission. The eGestor command embeds the advertisement component with
the project's partner link.
"""

from src.painel.models import Project, SitePersonalization

NOT_INFORMED = "Não informado"

SITE_INTRO = (
    "Vou lhe mantar as informações de uma empresa para implementar nesse layout. "
    "Otimize o site para SEO e cuide para não quebrar no mobile e deixar rolagem "
    "na horizontal. Mantenha responsivo.\n"
    "Logo é a imagem que lhe envio "
)
DEFAULT_PALETTE = (
    "use as cores da logo e utilize a regra 60,30,10 para as proporções das cores "
    "onde 60% é branco"
)
PARTNER_LINK_PLACEHOLDER = "link do parceiro"


def format_text(value: str | None) -> str:
    if value is None or not value.strip():
        return NOT_INFORMED
    return value


def format_bool(value: bool | None) -> str:
    if value is None:
        return NOT_INFORMED
    return "Sim" if value else "Não"


def format_items(items: list[object] | None) -> str:
    if not items:
        return "Nenhum"
    return f"{len(items)} item(ns)"


def basic_site_command(project: Project) -> str:
    return (
        f"{SITE_INTRO}\n"
        f"Paleta de cores {DEFAULT_PALETTE}\n"
        "\n"
        f"Nome da empresa: {project.client_name or NOT_INFORMED}\n"
        f"Responsável: {project.responsible_name or NOT_INFORMED}\n"
        f"Domínio: {project.domain or NOT_INFORMED}"
    )


def complete_site_command(project: Project, data: SitePersonalization) -> str:
    if data.paleta_cores:
        palette = f"Paleta de cores: {data.paleta_cores}"
    else:
        palette = f"Paleta de cores: {DEFAULT_PALETTE}"
    plans = f"Planos:\n{format_text(data.planos)}" if data.possui_planos else ""
    map_link = f"Link do Mapa: {format_text(data.link_mapa)}" if data.possui_mapa else ""

    lines = [
        SITE_INTRO,
        palette,
        "",
        "## INFORMAÇÕES BÁSICAS DA EMPRESA",
        f"Nome da empresa: {project.client_name or data.office_nome or NOT_INFORMED}",
        f"Responsável: {project.responsible_name or data.responsavel_nome or NOT_INFORMED}",
        f"Domínio: {project.domain or NOT_INFORMED}",
        f"Telefone: {format_text(data.telefone)}",
        f"Email: {format_text(data.email)}",
        f"Endereço: {format_text(data.endereco)}",
        f"Redes Sociais: {format_text(data.redes_sociais)}",
        "",
        "## IDENTIDADE VISUAL",
        f"Fonte: {format_text(data.fonte)}",
        f"Descrição: {format_text(data.descricao)}",
        f"Slogan: {format_text(data.slogan)}",
        "",
        "## SERVIÇOS E PLANOS",
        f"Possui planos: {format_bool(data.possui_planos)}",
        plans,
        f"Serviços: {format_text(data.servicos)}",
        f"Depoimentos: {format_text(data.depoimentos)}",
        "",
        "## CONFIGURAÇÕES ADICIONAIS",
        f"Botão WhatsApp: {format_bool(data.botao_whatsapp)}",
        f"Possui Mapa: {format_bool(data.possui_mapa)}",
        map_link,
        f"Modelo escolhido: {format_text(data.modelo)}",
        "",
        "## ARQUIVOS",
        f"Logo: {'Disponível' if data.logo_url else 'Não fornecido'}",
        f"Depoimentos (imagens): {format_items(data.depoimento_urls)}",
        f"Mídias (fotos, vídeos): {format_items(data.midia_urls)}",
    ]
    return "\n".join(lines)


def site_command(project: Project, personalization: SitePersonalization | None = None) -> str:
    """Complete brief when the submission is available, basic brief otherwise."""
    if project.personalization_id is None or personalization is None:
        return basic_site_command(project)
    return complete_site_command(project, personalization)


EGESTOR_COMPONENT = """import React from 'react';
import {{ Button }} from '@/components/ui/button';

const EgestorERP = () => {{
  // Link for both the title and button
  const egestorLink = "{link}";

  return <section className="py-16 bg-white overflow-hidden">
      <div className="container px-4 mx-auto max-w-6xl">
        <div className="flex flex-col md:flex-row md:items-center md:gap-8 lg:gap-12 mb-10">
          <div className="md:w-1/2 text-center md:text-left mb-8 md:mb-0 animate-fade-in">
            <a href={{egestorLink}} target="_blank" rel="noopener noreferrer" className="inline-block hover:opacity-90 transition-opacity">
              <h2 className="text-3xl md:text-4xl lg:text-5xl font-bold text-gray-800 mb-4 leading-tight">Sistema de gestão empresarial</h2>
            </a>
            <p className="text-lg md:text-xl text-gray-600 font-normal">
              Dobre seus lucros otimizando sua gestão
            </p>
          </div>
          <div className="md:w-1/2 rounded-xl overflow-hidden shadow-xl animate-fade-in">
            <video className="w-full aspect-video object-cover" autoPlay muted loop playsInline>
              <source src="https://egestor.com.br/assets/img/egestor-gestao-simples-para-crescer.mp4" type="video/mp4" />
              Seu navegador não suporta vídeos.
            </video>
          </div>
        </div>
        <div className="flex justify-center animate-fade-in">
          <a href={{egestorLink}} target="_blank" rel="noopener noreferrer" className="inline-block w-full max-w-sm">
            <button className="w-full py-3 bg-[#7CFFA0] hover:bg-[#6DF090] text-black font-medium rounded-full transition-all duration-200 shadow-lg hover:shadow-xl transform hover:scale-[1.02]">
              Teste grátis
            </button>
          </a>
        </div>
      </div>
    </section>;
}};

export default EgestorERP;"""  # noqa: E501


def partner_link(project: Project) -> str:
    return project.partner_link or project.blaster_link or PARTNER_LINK_PLACEHOLDER


def egestor_command(project: Project) -> str:
    return (
        "Vou lhe mantar as informações para adicionar uma seção de anúncio do eGestor no site. \n"
        "Insira o seguinte componente no site:\n"
        "\n"
        f"{EGESTOR_COMPONENT.format(link=partner_link(project))}"
    )
