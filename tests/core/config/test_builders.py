# tests/core/config/test_builders.py
"""
Testes do `ConfigBuilder` e da conversão estrita de mapeamentos.

Decisões arquiteturais:
    - O builder é o único ponto mutável; `build()` produz valores congelados
    - Conversão de mapeamento é estrita (sem coerção implícita)
"""

import pytest

from central_publisher.core.config.builders import ConfigBuilder, config_from_mapping
from central_publisher.core.config.errors import (
    InvalidConfigRootTypeError,
    InvalidConfigValueError,
    UnknownConfigKeyError,
    UnknownFieldPathError,
)
from central_publisher.core.config.model import ConfigurationSource, DeveloperConfig


def test_build_produces_independent_equal_instances():
    builder = ConfigBuilder().project_info(name="acme-core").developer(id="alice")
    first = builder.build()
    second = builder.build()

    assert first == second
    assert first is not second
    assert first.project_info.developers == (DeveloperConfig(id="alice"),)


def test_section_setters_cover_nested_sections():
    config = (
        ConfigBuilder()
        .scm(url="https://github.com/acme/core", developer_connection="scm:git:ssh://x")
        .license(name="MIT", distribution="repo")
        .issue_management(system="GitHub", url="https://github.com/acme/core/issues")
        .signing(secret_key_ring_file="/keys/secring.gpg", use_gpg_agent=False)
        .validation(strict_mode=True)
        .auto_detection(git_info=False)
        .build()
    )
    assert config.get("projectInfo.scm.developerConnection") == "scm:git:ssh://x"
    assert config.get("projectInfo.license.name") == "MIT"
    assert config.get("projectInfo.issueManagement.system") == "GitHub"
    assert config.get("signing.useGpgAgent") is False
    assert config.get("validation.strictMode") is True
    assert config.get("autoDetection.gitInfo") is False


def test_unknown_section_keyword_raises_type_error():
    with pytest.raises(TypeError):
        ConfigBuilder().publishing(auto_publsh=True)


def test_set_by_path_and_unknown_path():
    config = ConfigBuilder().set("publishing.excludeModules", ["samples", " ", "docs"]).build()
    assert config.publishing.exclude_modules == frozenset({"samples", "docs"})

    with pytest.raises(UnknownFieldPathError):
        ConfigBuilder().set("publishing.target", "central")


def test_empty_developer_is_ignored():
    config = ConfigBuilder().developer().developer(name="Bob").build()
    assert [d.name for d in config.project_info.developers] == ["Bob"]


def test_with_source_tags_metadata():
    config = ConfigBuilder().with_source(ConfigurationSource.DSL).build()
    assert config.metadata.sources == frozenset({ConfigurationSource.DSL})


def test_config_from_mapping_nested_camel_case():
    config = config_from_mapping(
        {
            "credentials": {"username": "alice"},
            "projectInfo": {
                "name": "acme-core",
                "scm": {"developerConnection": "scm:git:ssh://x"},
                "developers": [{"id": "alice", "organizationUrl": "https://acme.example"}],
            },
            "publishing": {"dryRun": True, "publications": ["maven"]},
        }
    )
    assert config.credentials.username == "alice"
    assert config.project_info.scm.developer_connection == "scm:git:ssh://x"
    assert config.project_info.developers[0].organization_url == "https://acme.example"
    assert config.publishing.dry_run is True
    assert config.publishing.publications == frozenset({"maven"})


@pytest.mark.parametrize(
    "data, error",
    [
        (["not", "a", "mapping"], InvalidConfigRootTypeError),
        ({"credentials": {"token": "x"}}, UnknownConfigKeyError),
        ({"unknownSection": {}}, UnknownConfigKeyError),
        ({"publishing": {"autoPublish": "yes"}}, InvalidConfigValueError),
        ({"projectInfo": {"name": 42}}, InvalidConfigValueError),
        ({"projectInfo": "acme"}, InvalidConfigValueError),
        ({"projectInfo": {"developers": [{"phone": "1"}]}}, UnknownConfigKeyError),
        ({"publishing": {"publications": "maven"}}, InvalidConfigValueError),
    ],
)
def test_config_from_mapping_is_strict(data, error):
    with pytest.raises(error):
        config_from_mapping(data)
