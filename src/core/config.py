"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (PDF, YAML, Percy) lean config de forma consistente.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="PDF_VRT_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Servidor local de PDF.js (externo: solo construimos URLs hacia él).
    pdf_server_host: str = Field(
        default="localhost",
        min_length=1,
        description="Host del servidor HTTP que sirve PDF.js y los documentos.",
    )
    pdf_server_port: int = Field(
        default=8080,
        ge=1,
        le=65535,
        description="Puerto del servidor HTTP local.",
    )
    viewer_url_path: str = Field(
        default="/web/viewer.html?file=/web/projects",
        min_length=1,
        description="Ruta del visor PDF.js; se le concatena /<proyecto>/<carpeta>/<pdf>.",
    )
    http_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Timeout para el chequeo HTTP del doctor (segundos).",
    )

    # Carpetas de trabajo
    projects_source_dir: Path = Field(
        default=Path("projects"),
        description="Carpeta con los proyectos del usuario (<proyecto>/<baseline|release>/*.pdf).",
    )
    server_projects_dir: Path = Field(
        default=Path("pdfjs-3.4.120-dist") / "web" / "projects",
        description="Carpeta servida por PDF.js donde se copian los proyectos.",
    )
    snapshot_config_dir: Path = Field(
        default=Path(".dist"),
        description="Carpeta donde se generan los YAML de snapshots.",
    )
    snapshot_file_prefix: str = Field(default="snapshots_")
    snapshot_file_ext: str = Field(default=".yml", pattern=r"^\.")
    file_encoding: str = Field(default="utf-8", min_length=1)

    # Percy
    branch_prefix: str = Field(
        default="DOC",
        min_length=1,
        description="Prefijo de los identificadores de documento / ramas Percy.",
    )
    wait_for_selector: str = Field(
        default="div#viewer > div.page[data-loaded]",
        min_length=1,
        description="Selector CSS que indica que la página del visor está renderizada.",
    )
    percy_command: list[str] = Field(
        default_factory=lambda: ["npx", "percy"],
        min_length=1,
        description="Comando base de Percy; se le añade `snapshot <archivo>`.",
    )
    max_concurrency: int = Field(
        default=4,
        ge=1,
        le=64,
        description="Documentos procesados en paralelo (conteo de páginas + Percy).",
    )

    @property
    def pdf_server_base_url(self) -> str:
        return f"http://{self.pdf_server_host}:{self.pdf_server_port}"
