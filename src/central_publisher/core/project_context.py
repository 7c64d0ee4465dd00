# src/central_publisher/core/project_context.py
"""
ProjectContext — contexto do projeto sendo configurado.

Este módulo define o **ProjectContext**, a descrição mínima do projeto
(ou subprojeto de um build multi-projeto) consumida por auto-detectores
e provedores de smart defaults.

Campos canônicos:
- name: nome do projeto (ou subprojeto)
- project_dir: diretório do projeto
- root_name: nome do projeto raiz (vazio quando o próprio projeto é a raiz)

Princípios fundamentais:
- O contexto é um valor imutável, construído pelo chamador
- Nenhum detector ou provedor acessa o build tool diretamente
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union


@dataclass(frozen=True)
class ProjectContext:
    name: str
    project_dir: Path
    root_name: str = ""

    @property
    def is_root(self) -> bool:
        return not self.root_name.strip() or self.name == self.root_name

    @property
    def directory_name(self) -> str:
        return Path(self.project_dir).name

    @classmethod
    def from_directory(
        cls,
        project_dir: Union[str, Path],
        *,
        name: Optional[str] = None,
        root_name: str = "",
    ) -> "ProjectContext":
        """Cria o contexto a partir de um diretório; o nome default é o do diretório."""
        path = Path(project_dir).expanduser().resolve()
        return cls(name=name if name is not None else path.name, project_dir=path, root_name=root_name)
