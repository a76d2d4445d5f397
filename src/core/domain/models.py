"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta del archivo de ejecución del usuario sin acoplar
  el Core a PyYAML (el loader solo entrega un dict).
- Los alias reflejan el vocabulario camelCase del YAML de entrada y del YAML
  de Percy, mientras el código Python usa snake_case.

Nota:
- Estos modelos describen *qué* se va a capturar, no *cómo* se captura.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.config import ConfigDict

from core.domain.run_mode import RunMode


def _name_as_str(value: object) -> object:
    # YAML convierte `2023` en int; las carpetas y documentos son nombres.
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class DocRef(BaseModel):
    """Referencia a un documento concreto de un proyecto (includeDocs/excludeDocs)."""

    model_config = ConfigDict(extra="ignore")

    project: str = Field(..., min_length=1)
    doc: str = Field(..., min_length=1)

    @field_validator("project", "doc", mode="before")
    @classmethod
    def _names_as_str(cls, value: object) -> object:
        return _name_as_str(value)


class SpecialDocConfig(BaseModel):
    """Filtros de páginas para un documento.

    Listas ausentes o `null` equivalen a "sin filtro".
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    project: str = Field(..., min_length=1)
    doc: str = Field(..., min_length=1)
    include_pages: list[int] = Field(default_factory=list, alias="includePages")
    exclude_pages: list[int] = Field(default_factory=list, alias="excludePages")

    @field_validator("project", "doc", mode="before")
    @classmethod
    def _names_as_str(cls, value: object) -> object:
        return _name_as_str(value)

    @field_validator("include_pages", "exclude_pages", mode="before")
    @classmethod
    def _none_as_empty(cls, value: object) -> object:
        return [] if value is None else value


class RunInfoConfig(BaseModel):
    """Archivo de descripción de la ejecución suministrado por el usuario.

    Por qué `None` vs `[]` importa:
    - `includeDocs` ausente significa "todos los documentos"; una lista vacía
      significa "ninguno".
    - `projectFolders` ausente no procesa nada (se avisa en el pipeline).
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    run_mode: RunMode = Field(
        ...,
        alias="runMode",
        description="create-baseline | compare-release-with-baseline.",
    )
    baseline_dir: str = Field(
        ...,
        min_length=1,
        alias="baselineDir",
        description="Subcarpeta de cada proyecto con los PDFs de referencia.",
    )
    release_dir: str = Field(
        default="",
        alias="releaseDir",
        description="Subcarpeta con los PDFs de la release (solo modo comparación).",
    )
    project_folders: list[str] | None = Field(default=None, alias="projectFolders")
    include_docs: list[DocRef] | None = Field(default=None, alias="includeDocs")
    exclude_docs: list[DocRef] | None = Field(default=None, alias="excludeDocs")
    special_doc_configs: list[SpecialDocConfig] | None = Field(
        default=None,
        alias="specialDocConfigs",
    )

    @field_validator("baseline_dir", "release_dir", mode="before")
    @classmethod
    def _coerce_dir_name(cls, value: object) -> object:
        return "" if value is None else _name_as_str(value)

    @field_validator("project_folders", mode="before")
    @classmethod
    def _coerce_project_folders(cls, value: object) -> object:
        if isinstance(value, list):
            return [_name_as_str(item) for item in value]
        return value

    @model_validator(mode="after")
    def _release_dir_required_for_compare(self) -> "RunInfoConfig":
        if self.run_mode is RunMode.COMPARE_RELEASE_WITH_BASELINE and not self.release_dir:
            raise ValueError("'releaseDir' is required when comparing a release with the baseline")
        return self

    @property
    def working_dir(self) -> str:
        return self.run_mode.working_dir(self.baseline_dir, self.release_dir)


class DocumentRunInfo(BaseModel):
    """Registro por documento derivado de `RunInfoConfig`.

    Vive una sola ejecución: se construye, se usa para generar el YAML de
    Percy y para fijar las variables de rama.
    """

    run_mode: RunMode
    baseline_dir: str
    release_dir: str
    doc_id: str = Field(..., min_length=1)
    project_folder: str = Field(..., min_length=1)
    pdf_file_name: str = Field(..., min_length=1)
    page_count: int = Field(..., ge=0)
    include_pages: list[int] = Field(default_factory=list)
    exclude_pages: list[int] = Field(default_factory=list)
    branch: str = Field(..., min_length=1, description="Valor de PERCY_BRANCH.")
    target_branch: str = Field(default="", description="Valor de PERCY_TARGET_BRANCH.")
    working_dir: str = Field(..., min_length=1)

    @property
    def has_page_filters(self) -> bool:
        return bool(self.include_pages or self.exclude_pages)


class AdditionalSnapshot(BaseModel):
    """Paso adicional de Percy: ejecuta JS en el visor y captura otra página."""

    model_config = ConfigDict(populate_by_name=True)

    suffix: str
    wait_for_selector: str = Field(..., alias="waitForSelector")
    execute: str


class SnapshotEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    url: str
    wait_for_selector: str = Field(..., alias="waitForSelector")
    additional_snapshots: list[AdditionalSnapshot] = Field(
        default_factory=list,
        alias="additionalSnapshots",
    )


class SnapshotConfig(BaseModel):
    """Contenido del archivo `percy snapshot` de un documento."""

    model_config = ConfigDict(populate_by_name=True)

    base_url: str = Field(..., alias="base-url")
    references: dict[str, str] = Field(
        default_factory=dict,
        description="Scripts compartidos; se emiten como anclas YAML.",
    )
    snapshots: list[SnapshotEntry] = Field(default_factory=list)
