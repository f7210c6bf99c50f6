"""Public personalization submissions and their stored files.

A submission runs strictly in order: logo, testimonials one by one, media one
by one, the personalization row, then the linked project. Nothing here is
transactional across steps. A logo failure aborts the submission; a failed
testimonial or media file is skipped with a notice; a failed project insert
leaves the saved personalization in place and is reported as a warning.
"""

import re
from collections.abc import Sequence
from typing import Literal
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.painel.core.logging import get_logger
from src.painel.models import ClientType, Project, ProjectStatus, SitePersonalization
from src.painel.repositories import PersonalizationRepository, ProjectRepository
from src.painel.schemas.common import Notice
from src.painel.schemas.personalization import (
    CaptionedReference,
    FileReference,
    PersonalizationForm,
    PersonalizationRead,
    SignedFile,
    SubmissionResult,
    parse_file_reference,
    parse_file_references,
)
from src.painel.services.file_upload import (
    FileUploader,
    PendingFile,
    validate_file_size,
)
from src.painel.services.storage_service import StorageClient

logger = get_logger(__name__)

LOGO_FOLDER = "logos"
TESTIMONIAL_FOLDER = "depoimentos"
MEDIA_FOLDER = "midias"

CONFIRMATION_PATH = "/confirmacao"

_IMAGE_EXTENSION = re.compile(r"\.(jpg|jpeg|png|gif|webp|svg)$", re.IGNORECASE)

Section = Literal["logo", "depoimento", "midia"]


class ConfirmationRequiredError(ValueError):
    """A submission without any file must be explicitly confirmed by the sender."""

    def __init__(self) -> None:
        super().__init__(
            "Nenhum arquivo foi anexado. Confirme que deseja enviar o formulário sem arquivos."
        )


class SubmissionError(Exception):
    """The submission stopped; `message` is safe to show to the sender."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def is_image_file(file_name: str) -> bool:
    return bool(file_name) and bool(_IMAGE_EXTENSION.search(file_name))


def check_file_size(section: Section, file_name: str, size: int, limit_mb: int) -> None:
    """Raise SubmissionError when a file is over the upload limit."""
    if validate_file_size(size, limit_mb):
        return
    suffix = f"excede o tamanho máximo permitido ({limit_mb}MB)"
    if section == "logo":
        raise SubmissionError(f"O arquivo de logo {suffix}")
    label = "depoimento" if section == "depoimento" else "mídia"
    raise SubmissionError(f"O arquivo de {label} {file_name} {suffix}")


def skipped_file_notice(file_name: str) -> Notice:
    return Notice(
        title="Erro ao enviar arquivo",
        description=f"Erro ao enviar {file_name}. Tentando continuar com os outros arquivos.",
        variant="destructive",
    )


class PersonalizationService:
    def __init__(
        self,
        personalization_repo: PersonalizationRepository,
        project_repo: ProjectRepository,
        session: AsyncSession,
        uploader: FileUploader,
        storage: StorageClient,
        signed_url_ttl: int = 3600,
    ):
        self.personalization_repo = personalization_repo
        self.project_repo = project_repo
        self.session = session
        self.uploader = uploader
        self.storage = storage
        self.signed_url_ttl = signed_url_ttl

    @property
    def max_file_size_mb(self) -> int:
        return self.uploader.max_size_mb

    def _check_sizes(
        self,
        logo: PendingFile | None,
        testimonials: Sequence[PendingFile],
        media: Sequence[PendingFile],
    ) -> None:
        limit = self.max_file_size_mb
        if logo is not None:
            check_file_size("logo", logo.filename, logo.size, limit)
        for file in testimonials:
            check_file_size("depoimento", file.filename, file.size, limit)
        for file in media:
            check_file_size("midia", file.filename, file.size, limit)

    async def submit(
        self,
        form: PersonalizationForm,
        logo: PendingFile | None = None,
        testimonials: Sequence[PendingFile] = (),
        media: Sequence[PendingFile] = (),
        captions: Sequence[str] = (),
        confirmed_without_files: bool = False,
    ) -> SubmissionResult:
        if logo is None and not testimonials and not media and not confirmed_without_files:
            raise ConfirmationRequiredError()
        self._check_sizes(logo, testimonials, media)

        notices: list[Notice] = []
        skipped: list[str] = []

        logo_path: str | None = None
        if logo is not None:
            result = await self.uploader.upload(logo, LOGO_FOLDER)
            if not result.success:
                logger.error("Logo upload failed", file_name=logo.filename, error=result.error)
                raise SubmissionError(f"Erro ao fazer upload da logo: {result.error}")
            logo_path = result.file_path

        testimonial_paths: list[str] = []
        for file in testimonials:
            result = await self.uploader.upload(file, TESTIMONIAL_FOLDER)
            if result.success and result.file_path:
                testimonial_paths.append(result.file_path)
            else:
                logger.warning("Testimonial skipped", file_name=file.filename, error=result.error)
                skipped.append(file.filename)
                notices.append(skipped_file_notice(file.filename))

        media_items: list[dict[str, str]] = []
        for index, file in enumerate(media):
            caption = captions[index] if index < len(captions) else ""
            result = await self.uploader.upload(file, MEDIA_FOLDER)
            if result.success and result.file_path:
                media_items.append({"url": result.file_path, "caption": caption})
            else:
                logger.warning("Media file skipped", file_name=file.filename, error=result.error)
                skipped.append(file.filename)
                notices.append(skipped_file_notice(file.filename))

        personalization = SitePersonalization(
            **form.model_dump(),
            logo_url=logo_path,
            depoimento_urls=testimonial_paths,
            midia_urls=media_items,
        )
        self.personalization_repo.add(personalization)
        try:
            await self.session.commit()
            await self.session.refresh(personalization)
        except Exception as e:
            await self.session.rollback()
            logger.error(
                "Personalization insert failed",
                uploaded_files=len(testimonial_paths) + len(media_items) + bool(logo_path),
                error=str(e),
                exc_info=True,
            )
            raise SubmissionError("Erro ao salvar personalização.") from e

        # The project insert may roll back, which expires the saved row
        personalization_id = personalization.id
        logger.info(
            "Personalization saved",
            personalization_id=str(personalization_id),
            testimonials=len(testimonial_paths),
            media=len(media_items),
        )

        project_id = await self._create_linked_project(
            personalization_id,
            client_name=personalization.office_nome,
            responsible_name=personalization.responsavel_nome,
            template=personalization.modelo,
        )
        if project_id is None:
            notices.append(
                Notice(
                    title="Aviso",
                    description=(
                        "Sua personalização foi salva, mas houve um problema "
                        "na criação do projeto."
                    ),
                    variant="warning",
                )
            )

        notices.append(
            Notice(
                title="Personalização salva com sucesso!",
                description="Suas informações foram enviadas e um projeto foi criado.",
            )
        )
        return SubmissionResult(
            personalization_id=personalization_id,
            project_id=project_id,
            redirect_to=CONFIRMATION_PATH,
            notices=notices,
            skipped_files=skipped,
        )

    async def _create_linked_project(
        self,
        personalization_id: UUID,
        client_name: str,
        responsible_name: str,
        template: str | None,
    ) -> UUID | None:
        project = Project(
            client_name=client_name,
            responsible_name=responsible_name,
            template=template,
            status=ProjectStatus.RECEBIDO.value,
            client_type=ClientType.CLIENTE_FINAL.value,
            personalization_id=personalization_id,
        )
        self.project_repo.add(project)
        try:
            await self.session.commit()
            await self.session.refresh(project)
        except Exception as e:
            await self.session.rollback()
            logger.error(
                "Project creation failed after personalization was saved",
                personalization_id=str(personalization_id),
                error=str(e),
                exc_info=True,
            )
            return None
        logger.info(
            "Project created from personalization",
            project_id=str(project.id),
            personalization_id=str(personalization_id),
        )
        return project.id

    async def get(self, personalization_id: UUID) -> SitePersonalization:
        personalization = await self.personalization_repo.get_by_id(personalization_id)
        if personalization is None:
            raise LookupError(f"Personalization {personalization_id} not found")
        return personalization

    async def get_detail(self, personalization_id: UUID) -> PersonalizationRead:
        row = await self.get(personalization_id)
        logo = parse_file_reference(row.logo_url) if row.logo_url else None
        return PersonalizationRead(
            id=row.id,
            office_nome=row.office_nome,
            responsavel_nome=row.responsavel_nome,
            telefone=row.telefone,
            email=row.email,
            endereco=row.endereco,
            redes_sociais=row.redes_sociais,
            fonte=row.fonte,
            paleta_cores=row.paleta_cores,
            descricao=row.descricao,
            slogan=row.slogan,
            possui_planos=row.possui_planos,
            planos=row.planos,
            servicos=row.servicos,
            depoimentos=row.depoimentos,
            botao_whatsapp=row.botao_whatsapp,
            possui_mapa=row.possui_mapa,
            link_mapa=row.link_mapa,
            modelo=row.modelo,
            logo=FileReference(path=logo.path) if logo else None,
            depoimento_files=parse_file_references(row.depoimento_urls),
            midia_files=parse_file_references(row.midia_urls),
            created_at=row.created_at,
        )

    async def signed_files(self, personalization_id: UUID) -> list[SignedFile]:
        """Time-limited URLs for every stored file, logo first."""
        detail = await self.get_detail(personalization_id)
        entries: list[tuple[Section, FileReference | CaptionedReference, int | None]] = []
        if detail.logo is not None:
            entries.append(("logo", detail.logo, None))
        entries.extend(("depoimento", ref, i) for i, ref in enumerate(detail.depoimento_files))
        entries.extend(("midia", ref, i) for i, ref in enumerate(detail.midia_files))

        files: list[SignedFile] = []
        for section, ref, index in entries:
            files.append(await self._sign(section, ref, index))
        return files

    async def _sign(
        self,
        section: Section,
        ref: FileReference | CaptionedReference,
        index: int | None,
    ) -> SignedFile:
        caption = ref.caption if isinstance(ref, CaptionedReference) else ""
        default_name = section if index is None else f"{section} {index + 1}"
        display_name = caption or default_name
        file_name = ref.path.rsplit("/", 1)[-1] or display_name

        signed_url = await self.storage.create_signed_url(ref.path, self.signed_url_ttl)
        exists = True
        if signed_url is None:
            exists = await self.storage.exists(ref.path)

        return SignedFile(
            section=section,
            path=ref.path,
            file_name=file_name,
            display_name=display_name,
            caption=caption,
            is_image=is_image_file(file_name),
            signed_url=signed_url,
            exists=exists,
        )
