from collections.abc import Iterator

from shrine_planner.engine.shrine_config import ShrineConfig
from shrine_planner.models.requirement import Condition, Requirement
from shrine_planner.optimizer.combinations import (
    count_configurations,
    generate_configurations,
)
from shrine_planner.optimizer.specs import StatConfig, build_stat_configs


PRE = Condition.PRE
POST = Condition.POST
ANY = Condition.ANY


def _minimums(configuration) -> dict[str, tuple[int, int]]:
    return {stat: (sc.min_pre, sc.min_post) for stat, sc in configuration.items()}


def test_build_stat_configs_takes_max_per_condition():
    configs = build_stat_configs(
        {
            "strength": [
                Requirement(20, PRE),
                Requirement(35, PRE),
                Requirement(50, POST),
                Requirement(40, ANY),
            ],
        }
    )
    assert configs["strength"] == StatConfig(
        is_attunement=False,
        min_pre=35,
        min_post=50,
        any_requirements=(Requirement(40, ANY),),
    )


def test_build_stat_configs_skips_stats_without_requirements():
    configs = build_stat_configs({"strength": [], "agility": [Requirement(10, POST)]})
    assert list(configs) == ["agility"]


def test_build_stat_configs_matches_attunements_case_insensitively():
    configs = build_stat_configs(
        {"FlameCharm": [Requirement(10, PRE)], "Strength": [Requirement(10, PRE)]}
    )
    assert configs["FlameCharm"].is_attunement is True
    assert configs["Strength"].is_attunement is False


def test_build_stat_configs_uses_configured_attunements():
    config = ShrineConfig(attunement_stats=("Strength",))
    configs = build_stat_configs({"strength": [Requirement(10, PRE)]}, config)
    assert configs["strength"].is_attunement is True


def test_no_any_requirements_yields_base_configuration_once():
    base = build_stat_configs({"strength": [Requirement(40, PRE)]})
    configurations = list(generate_configurations(base))
    assert configurations == [base]
    assert count_configurations(base) == 1


def test_empty_input_yields_one_empty_configuration():
    assert list(generate_configurations({})) == [{}]


def test_single_any_requirement_goes_post_then_pre():
    base = build_stat_configs({"strength": [Requirement(20, PRE), Requirement(40, ANY)]})
    configurations = [_minimums(c) for c in generate_configurations(base)]
    assert configurations == [
        {"strength": (20, 40)},
        {"strength": (40, 0)},
    ]


def test_bit_order_follows_stat_then_requirement_order():
    base = build_stat_configs(
        {
            "a": [Requirement(10, ANY)],
            "b": [Requirement(20, ANY)],
        }
    )
    configurations = [_minimums(c) for c in generate_configurations(base)]
    assert configurations == [
        {"a": (0, 10), "b": (0, 20)},
        {"a": (10, 0), "b": (0, 20)},
        {"a": (0, 10), "b": (20, 0)},
        {"a": (10, 0), "b": (20, 0)},
    ]


def test_any_placement_never_lowers_seeded_minimums():
    base = build_stat_configs(
        {"strength": [Requirement(50, PRE), Requirement(70, POST), Requirement(30, ANY)]}
    )
    configurations = [_minimums(c) for c in generate_configurations(base)]
    assert configurations == [{"strength": (50, 70)}, {"strength": (50, 70)}]


def test_two_any_requirements_on_one_stat():
    base = build_stat_configs({"strength": [Requirement(30, ANY), Requirement(60, ANY)]})
    assert count_configurations(base) == 4
    configurations = [_minimums(c) for c in generate_configurations(base)]
    assert configurations == [
        {"strength": (0, 60)},
        {"strength": (30, 60)},
        {"strength": (60, 30)},
        {"strength": (60, 0)},
    ]


def test_generation_is_lazy_and_restartable():
    base = build_stat_configs({"a": [Requirement(10, ANY)], "b": [Requirement(5, ANY)]})
    stream = generate_configurations(base)
    assert isinstance(stream, Iterator)
    first = next(stream)
    assert _minimums(first) == {"a": (0, 10), "b": (0, 5)}
    assert len(list(generate_configurations(base))) == count_configurations(base) == 4


def test_generated_configurations_do_not_alias_the_base():
    base = build_stat_configs({"strength": [Requirement(40, ANY)]})
    list(generate_configurations(base))
    assert base["strength"].min_pre == 0
    assert base["strength"].min_post == 0
