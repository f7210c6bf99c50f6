"""Built-in site models, used when a form link predates the model_templates table."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CatalogModel:
    id: str
    name: str
    description: str
    image_url: str
    custom_url: str | None = None


MODEL_CATALOG: tuple[CatalogModel, ...] = (
    CatalogModel(
        id="modelo1",
        name="Modelo 1",
        description=(
            "Um site moderno e responsivo, ideal para quem busca presença online "
            "com estilo e simplicidade"
        ),
        image_url="/placeholder.svg",
        custom_url="contabil",
    ),
    CatalogModel(
        id="modelo2",
        name="Modelo 2",
        description=(
            "Design clean e objetivo, feito para apresentar suas informações "
            "de forma clara e profissional"
        ),
        image_url="/placeholder.svg",
        custom_url="empresarial",
    ),
    CatalogModel(
        id="modelo3",
        name="Modelo 3",
        description=(
            "Layout versátil que se adapta a diferentes tipos de negócio ou projeto pessoal."
        ),
        image_url="/placeholder.svg",
        custom_url="consultoria",
    ),
    CatalogModel(
        id="modelo4",
        name="Modelo 4",
        description=(
            "Site focado em conversão e destaque visual, perfeito para quem quer "
            "impactar logo de cara."
        ),
        image_url="/placeholder.svg",
        custom_url="escritorio",
    ),
    CatalogModel(
        id="modelo5",
        name="Modelo 5",
        description=(
            "Um modelo funcional, rápido e leve, com tudo o que você precisa para "
            "começar bem na internet."
        ),
        image_url="/placeholder.svg",
        custom_url="fiscal",
    ),
    CatalogModel(
        id="modelo6",
        name="Modelo 6",
        description=(
            "Design equilibrado entre beleza e usabilidade, pronto para ser "
            "personalizado ao seu estilo."
        ),
        image_url="/placeholder.svg",
        custom_url="juridico",
    ),
)


def find_catalog_model(key: str) -> CatalogModel | None:
    """Match a catalog entry by id or legacy custom URL."""
    for model in MODEL_CATALOG:
        if key in (model.id, model.custom_url):
            return model
    return None
