# tests/core/config/test_resolver.py
"""
Testes da engine de resolução em camadas.

Este módulo valida o comportamento ponta a ponta de
`ConfigurationResolver.resolve` e da função `resolve` de módulo:
- precedência fixa entre fontes (maior precedência vence)
- `metadata.sources` contém exatamente as fontes que contribuíram
- o valor final de cada campo coincide com o diagnóstico
- o cache de properties é reutilizado entre resoluções e invalidado por mtime
- validação reporta violações sem levantar

Decisões arquiteturais:
    - Todo teste injeta o ambiente (`environ`) para isolamento
    - Cada resolver possui seu próprio `FileCache`

Limites explícitos:
    - Não valida heurísticas de auto-detecção reais
"""

import threading

import pytest

from central_publisher.core.autodetection.detector import Confidence, DetectedValue
from central_publisher.core.config.builders import ConfigBuilder
from central_publisher.core.config.errors import AggregatedConfigurationError
from central_publisher.core.config.fields import FIELD_PATHS
from central_publisher.core.config.model import ConfigurationSource, PublisherConfig
from central_publisher.core.config.resolver import ConfigurationResolver, ResolvedConfig, resolve
from central_publisher.core.errors import DETECTOR_FAILED, MALFORMED_ENTRY

DSL = ConfigurationSource.DSL
PROPERTIES = ConfigurationSource.PROPERTIES
ENVIRONMENT = ConfigurationSource.ENVIRONMENT
AUTO_DETECTED = ConfigurationSource.AUTO_DETECTED
SMART_DEFAULTS = ConfigurationSource.SMART_DEFAULTS


def _assert_diagnostics_agree(resolved: ResolvedConfig) -> None:
    for path in FIELD_PATHS:
        assert resolved.config.get(path) == resolved.diagnostics.final_value(path), path


def test_empty_dsl_only_returns_defaults():
    """
    Resolução apenas com DSL vazia: defaults de tipo e nenhuma fonte.
    """
    resolver = ConfigurationResolver(environ={})
    config, diagnostics, errors = resolver.resolve(PublisherConfig(), enable_auto_detection=False)

    assert config.metadata.sources == frozenset()
    assert diagnostics.sources_used() == frozenset()
    assert config.publishing.aggregation is True
    assert config.publishing.auto_publish is False
    assert config.publishing.dry_run is False
    assert config.credentials.username == ""
    assert config.project_info.developers == ()
    assert config.metadata.last_modified is not None
    assert "credentials.username" in [e.field for e in errors]


def test_precedence_scenario_dsl_env_properties(write_properties):
    """
    props `SONATYPE_USERNAME=props-user`, env `env-user`/`env-password`,
    DSL `username=dsl-user` → username da DSL, senha do ambiente.
    """
    path = write_properties("SONATYPE_USERNAME=props-user\n")
    resolver = ConfigurationResolver(
        environ={"SONATYPE_USERNAME": "env-user", "SONATYPE_PASSWORD": "env-password"}
    )
    explicit = ConfigBuilder().credentials(username="dsl-user").build()

    resolved = resolver.resolve(explicit, properties_path=path)
    config = resolved.config

    assert config.credentials.username == "dsl-user"
    assert config.credentials.password == "env-password"
    assert config.metadata.sources == {DSL, ENVIRONMENT, PROPERTIES}
    assert resolved.diagnostics.winning_source("credentials.username") is DSL
    assert resolved.diagnostics.winning_source("credentials.password") is ENVIRONMENT
    assert [s for _, s in resolved.diagnostics.values_for("credentials.username")] == [
        ENVIRONMENT,
        PROPERTIES,
        DSL,
    ]
    _assert_diagnostics_agree(resolved)


@pytest.mark.parametrize(
    "lower, higher",
    [
        ("env", "props"),
        ("env", "dsl"),
        ("props", "dsl"),
        ("auto", "env"),
    ],
)
def test_higher_precedence_source_wins(lower, higher, write_properties, project_ctx, StaticDetector):
    values = {lower: "low-name", higher: "high-name"}
    environ = {}
    properties_path = None
    explicit = None
    detectors = []

    for kind, name in values.items():
        if kind == "env":
            environ["LIB_NAME"] = name
        elif kind == "props":
            properties_path = write_properties(f"POM_NAME={name}\n")
        elif kind == "dsl":
            explicit = ConfigBuilder().project_info(name=name).build()
        elif kind == "auto":
            detectors.append(
                StaticDetector("project", ConfigBuilder().project_info(name=name).build())
            )

    resolver = ConfigurationResolver(
        project=project_ctx,
        environ=environ,
        environment_mappings=(("LIB_NAME", "projectInfo.name"),),
        detectors=detectors,
    )
    resolved = resolver.resolve(explicit, properties_path=properties_path)

    assert resolved.config.project_info.name == "high-name"
    _assert_diagnostics_agree(resolved)


def test_invalid_url_in_properties_yields_single_violation(write_properties):
    path = write_properties("POM_URL=not-a-url\n")
    resolver = ConfigurationResolver(environ={})
    explicit = (
        ConfigBuilder()
        .credentials(username="publisher", password="s3cret-passw0rd")
        .project_info(name="acme-core")
        .build()
    )

    config, _, errors = resolver.resolve(explicit, properties_path=path)

    assert config.project_info.url == "not-a-url"
    assert [e.field for e in errors] == ["projectInfo.url"]


def test_auto_detected_developer_survives_smart_defaults(project_ctx, StaticDetector):
    detected = ConfigBuilder().developer(id="alice", name="Alice").build()
    resolver = ConfigurationResolver(
        project=project_ctx,
        environ={},
        detectors=[StaticDetector("git", detected, category="gitInfo")],
    )

    resolved = resolver.resolve()
    config = resolved.config

    assert [d.id for d in config.project_info.developers] == ["alice"]
    assert config.project_info.name == "acme-core"
    assert config.metadata.sources == {AUTO_DETECTED, SMART_DEFAULTS}
    assert resolved.diagnostics.winning_source("projectInfo.developers") is AUTO_DETECTED
    _assert_diagnostics_agree(resolved)


def test_smart_defaults_never_override_earlier_sources(project_ctx, StaticDetector):
    detected = ConfigBuilder().project_info(name="detected-name").license(name="MIT").build()
    resolver = ConfigurationResolver(
        project=project_ctx,
        environ={},
        detectors=[StaticDetector("project", detected)],
    )

    resolved = resolver.resolve()

    assert resolved.config.project_info.name == "detected-name"
    assert resolved.config.project_info.license.name == "MIT"
    assert resolved.config.project_info.license.distribution == "repo"
    assert resolved.diagnostics.values_for("projectInfo.name") == [("detected-name", AUTO_DETECTED)]
    assert resolved.config.credentials.username == ""


def test_auto_detection_can_be_disabled(project_ctx, StaticDetector):
    detector = StaticDetector("project", ConfigBuilder().project_info(url="https://x.example").build())
    resolver = ConfigurationResolver(project=project_ctx, environ={}, detectors=[detector])

    resolved = resolver.resolve(enable_auto_detection=False)

    assert detector.calls == 0
    assert AUTO_DETECTED not in resolved.config.metadata.sources


def test_auto_detection_toggle_from_explicit_config(project_ctx, StaticDetector):
    detector = StaticDetector(
        "git", ConfigBuilder().scm(url="https://github.com/acme/core").build(), category="gitInfo"
    )
    resolver = ConfigurationResolver(project=project_ctx, environ={}, detectors=[detector])
    explicit = ConfigBuilder().auto_detection(git_info=False).build()

    resolved = resolver.resolve(explicit)

    assert detector.calls == 0
    assert resolved.config.project_info.scm.url == ""
    assert resolved.config.auto_detection.git_info is False


def test_failing_detector_becomes_warning(project_ctx, StaticDetector):
    resolver = ConfigurationResolver(
        project=project_ctx,
        environ={},
        detectors=[
            StaticDetector("broken", error=RuntimeError("no .git directory")),
            StaticDetector("project", ConfigBuilder().project_info(description="d").build()),
        ],
    )

    resolved = resolver.resolve()

    assert [w.code for w in resolved.warnings] == [DETECTOR_FAILED]
    assert resolved.config.project_info.description == "d"


def test_malformed_environment_boolean_is_warning():
    resolver = ConfigurationResolver(
        environ={"DRY_RUN": "nope"},
        environment_mappings=(("DRY_RUN", "publishing.dryRun"),),
    )
    resolved = resolver.resolve(validate=False)

    assert [w.code for w in resolved.warnings] == [MALFORMED_ENTRY]
    assert resolved.config.publishing.dry_run is False
    assert resolved.config.metadata.sources == frozenset()
    assert resolved.report is None
    assert resolved.errors == ()


def test_properties_cache_reused_across_resolutions(write_properties, file_cache):
    """
    Mesmo arquivo resolvido duas vezes sem alteração → exatamente um hit;
    conteúdo novo com mtime mais recente → terceira resolução reflete o novo valor.
    """
    path = write_properties("POM_NAME=first\n", mtime=1_700_000_000)
    resolver = ConfigurationResolver(environ={}, file_cache=file_cache)

    first = resolver.resolve(properties_path=path)
    assert file_cache.hit_count == 0
    second = resolver.resolve(properties_path=path)
    assert file_cache.hit_count == 1
    assert first.config.project_info.name == second.config.project_info.name == "first"

    write_properties("POM_NAME=second\n", mtime=1_700_000_100)
    third = resolver.resolve(properties_path=path)

    assert third.config.project_info.name == "second"
    assert file_cache.hit_count == 1
    assert file_cache.miss_count == 2


def test_explicit_file_path_is_dsl(tmp_path):
    path = tmp_path / "publisher.yaml"
    path.write_text("projectInfo:\n  name: from-yaml\n", encoding="utf-8")

    config, diagnostics, _ = ConfigurationResolver(environ={}).resolve(path)

    assert config.project_info.name == "from-yaml"
    assert diagnostics.winning_source("projectInfo.name") is DSL


def test_valid_config_resolves_without_errors(valid_config):
    resolved = ConfigurationResolver(environ={}).resolve(valid_config)

    assert resolved.errors == ()
    assert resolved.is_valid
    resolved.raise_for_errors()


def test_raise_for_errors_aggregates_all_violations():
    resolved = ConfigurationResolver(environ={}).resolve(PublisherConfig())

    with pytest.raises(AggregatedConfigurationError) as excinfo:
        resolved.raise_for_errors()

    fields = [v.field for v in excinfo.value.errors]
    assert fields == ["credentials.username", "credentials.password", "projectInfo.name"]
    assert "credentials.username" in str(excinfo.value)


def test_require_credentials_false_skips_credential_rules():
    resolver = ConfigurationResolver(environ={}, require_credentials=False)
    _, _, errors = resolver.resolve(ConfigBuilder().project_info(name="acme").build())
    assert errors == []


def test_strict_mode_blocks_on_warnings():
    explicit = (
        ConfigBuilder()
        .credentials(username="publisher", password="short")
        .project_info(name="acme")
        .validation(strict_mode=True)
        .build()
    )
    resolved = ConfigurationResolver(environ={}).resolve(explicit)

    assert [v.code for v in resolved.errors] == ["REQ-WEAK_PASSWORD"]
    assert not resolved.is_valid


def test_validation_disabled_by_toggle():
    explicit = ConfigBuilder().validation(enabled=False).build()
    resolved = ConfigurationResolver(environ={}).resolve(explicit)
    assert resolved.report is None
    assert resolved.is_valid


def test_validate_on_load_violations_are_collected(write_properties):
    path = write_properties("POM_URL=ftp://acme.example\n")
    resolver = ConfigurationResolver(environ={}, validate_on_load=True)

    resolved = resolver.resolve(properties_path=path, validate=False)

    assert "FMT-PROJECT_URL" in [v.code for v in resolved.load_violations]


def test_config_hash_is_stable_across_resolutions(valid_config):
    resolver = ConfigurationResolver(environ={})
    a = resolver.resolve(valid_config)
    b = resolver.resolve(valid_config)

    assert a.config_hash == b.config_hash
    assert a.config.metadata.last_modified <= b.config.metadata.last_modified


def test_module_level_resolve_uses_injected_environment(write_properties):
    path = write_properties("POM_NAME=acme\n")
    config, diagnostics, _ = resolve(
        None,
        path,
        environ={"SONATYPE_USERNAME": "env-user"},
    )

    assert config.project_info.name == "acme"
    assert config.credentials.username == "env-user"
    assert diagnostics.sources_used() == {PROPERTIES, ENVIRONMENT}


def test_concurrent_resolutions_share_cache(write_properties, file_cache):
    path = write_properties("POM_NAME=acme\nSONATYPE_USERNAME=props-user\n")
    resolver = ConfigurationResolver(environ={}, file_cache=file_cache)
    results = []
    barrier = threading.Barrier(6)

    def worker():
        barrier.wait()
        results.append(resolver.resolve(properties_path=path))

    threads = [threading.Thread(target=worker) for _ in range(6)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert file_cache.miss_count == 1
    assert file_cache.hit_count == 5
    assert {r.config_hash for r in results} == {results[0].config_hash}


def test_detected_values_keep_highest_confidence(project_ctx, StaticDetector):
    from central_publisher.core.autodetection.detector import AutoDetectionManager

    low = DetectedValue("projectInfo.url", "https://low.example", "directory", Confidence.LOW)
    high = DetectedValue("projectInfo.url", "https://high.example", ".git/config", Confidence.HIGH)
    manager = AutoDetectionManager(
        [
            StaticDetector("a", PublisherConfig(), detected_values={"projectInfo.url": high}),
            StaticDetector("b", PublisherConfig(), detected_values={"projectInfo.url": low}),
        ]
    )

    summary = manager.detect_configuration(project_ctx)

    assert summary.detected_values["projectInfo.url"] is high
