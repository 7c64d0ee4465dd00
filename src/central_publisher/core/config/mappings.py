# src/central_publisher/core/config/mappings.py
"""
Tabelas declarativas de mapeamento chave externa → field path.

Cada tabela é uma tupla ordenada de pares `(external_key, field_path)`.
A ordem é relevante apenas para diagnóstico e relatórios; a precedência
entre fontes é decidida exclusivamente pelo resolver.

Decisões arquiteturais:
    - Tabelas são dados, não código: a interpretação é feita por um único
      despacho genérico em `sources.apply_mapping`
    - Chaves de properties seguem o formato tradicional de `gradle.properties`
      (`POM_*`, `SONATYPE_*`, `signing.*`)
    - Alvos `projectInfo.developer.*` constroem uma lista com um único developer
"""

from __future__ import annotations

from typing import Iterable, Tuple

from .errors import UnknownFieldPathError
from .fields import is_known_target

Mapping = Tuple[Tuple[str, str], ...]

DEFAULT_PROPERTY_MAPPINGS: Mapping = (
    # Credentials
    ("SONATYPE_USERNAME", "credentials.username"),
    ("SONATYPE_PASSWORD", "credentials.password"),
    # Project info
    ("POM_NAME", "projectInfo.name"),
    ("POM_DESCRIPTION", "projectInfo.description"),
    ("POM_URL", "projectInfo.url"),
    ("POM_SCM_URL", "projectInfo.scm.url"),
    ("POM_SCM_CONNECTION", "projectInfo.scm.connection"),
    ("POM_SCM_DEV_CONNECTION", "projectInfo.scm.developerConnection"),
    ("POM_LICENCE_NAME", "projectInfo.license.name"),
    ("POM_LICENCE_URL", "projectInfo.license.url"),
    ("POM_LICENCE_DIST", "projectInfo.license.distribution"),
    ("POM_DEVELOPER_ID", "projectInfo.developer.id"),
    ("POM_DEVELOPER_NAME", "projectInfo.developer.name"),
    ("POM_DEVELOPER_EMAIL", "projectInfo.developer.email"),
    ("POM_DEVELOPER_ORGANIZATION", "projectInfo.developer.organization"),
    ("POM_DEVELOPER_ORGANIZATION_URL", "projectInfo.developer.organizationUrl"),
    # Signing
    ("signing.keyId", "signing.keyId"),
    ("signing.password", "signing.password"),
    ("signing.secretKeyRingFile", "signing.secretKeyRingFile"),
    # Publishing
    ("autoPublish", "publishing.autoPublish"),
    ("aggregation", "publishing.aggregation"),
)

ENVIRONMENT_MAPPINGS: Mapping = (
    ("SONATYPE_USERNAME", "credentials.username"),
    ("SONATYPE_PASSWORD", "credentials.password"),
    ("SIGNING_KEY", "signing.keyId"),
    ("SIGNING_PASSWORD", "signing.password"),
)


def check_mapping(pairs: Iterable[Tuple[str, str]]) -> Mapping:
    """
    Normaliza e valida uma tabela de mapeamento customizada.

    Raises:
        UnknownFieldPathError: Se algum alvo não for um field path conhecido.
    """
    mapping = tuple((str(key), str(path)) for key, path in pairs)
    for key, path in mapping:
        if not is_known_target(path):
            raise UnknownFieldPathError(
                f"Mapeamento '{key}' aponta para field path desconhecido: {path}"
            )
    return mapping
