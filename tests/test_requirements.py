from arc_loot_helper.models import (
    HideoutModule,
    HideoutModuleLevel,
    ItemRequirementEntry,
    Project,
    ProjectPhase,
    Quest,
)
from arc_loot_helper.progress import GameProgress, ProgressTracker
from arc_loot_helper.requirements import (
    aggregate_hideout_requirements,
    aggregate_project_requirements,
    aggregate_quest_requirements,
    calculate_completed_requirements,
    calculate_item_requirements,
    calculate_remaining_requirements,
    has_category_requirements,
    merge_requirements,
    requirement_breakdown,
)


def _quest(quest_id, **items):
    return Quest(
        id=quest_id,
        required_items=[ItemRequirementEntry(item_id, qty) for item_id, qty in items.items()],
    )


def _scrappy():
    return HideoutModule(
        id="scrappy",
        levels=[
            HideoutModuleLevel(1, [ItemRequirementEntry("dog-collar", 1)]),
            HideoutModuleLevel(2, [ItemRequirementEntry("lemon", 3)]),
            HideoutModuleLevel(3, [ItemRequirementEntry("metal-parts", 50)]),
        ],
    )


def _expedition():
    return Project(
        id="expedition",
        phases=[
            ProjectPhase(1, required_items=[ItemRequirementEntry("spring", 15)]),
            ProjectPhase(2, category_requirements={"Combat Items": 250000}),
            ProjectPhase(3, required_items=[ItemRequirementEntry("metal-parts", 5)]),
        ],
    )


def test_quest_requirements_are_summed_per_item():
    quests = [_quest("q1", a=2, b=1), _quest("q2", a=3), Quest(id="q3")]
    assert aggregate_quest_requirements(quests) == {"a": 5, "b": 1}


def test_empty_inputs_give_empty_maps():
    assert aggregate_quest_requirements([]) == {}
    assert aggregate_hideout_requirements([]) == {}
    assert aggregate_project_requirements([]) == {}
    assert calculate_item_requirements([], [], []) == {}


def test_quest_aggregation_is_additive():
    first = [_quest("q1", a=2, b=1), _quest("q2", c=4)]
    second = [_quest("q2", c=4), _quest("q3", a=7)]

    combined = aggregate_quest_requirements(first + second)
    assert combined == merge_requirements(
        aggregate_quest_requirements(first), aggregate_quest_requirements(second)
    )


def test_hideout_counts_every_level():
    assert aggregate_hideout_requirements([_scrappy()]) == {
        "dog-collar": 1,
        "lemon": 3,
        "metal-parts": 50,
    }


def test_project_category_requirements_are_excluded():
    assert aggregate_project_requirements([_expedition()]) == {"spring": 15, "metal-parts": 5}
    assert has_category_requirements([_expedition()])
    assert not has_category_requirements([Project(id="p", phases=[ProjectPhase(1)])])


def test_zero_quantity_entries_never_create_keys():
    assert aggregate_quest_requirements([_quest("q1", a=0)]) == {}


def test_total_is_sum_of_three_sources():
    quests = [_quest("q1", **{"metal-parts": 10, "spring": 5})]
    modules = [_scrappy()]
    projects = [_expedition()]

    total = calculate_item_requirements(quests, modules, projects)
    portions = (
        aggregate_quest_requirements(quests),
        aggregate_hideout_requirements(modules),
        aggregate_project_requirements(projects),
    )
    for item_id, quantity in total.items():
        assert quantity == sum(portion.get(item_id, 0) for portion in portions)
    assert total == {"metal-parts": 65, "spring": 20, "dog-collar": 1, "lemon": 3}


def test_merge_is_order_independent():
    a, b, c = {"x": 1, "y": 2}, {"y": 3}, {"z": 4, "x": 5}
    assert merge_requirements(a, b, c) == merge_requirements(c, a, b) == {"x": 6, "y": 5, "z": 4}


def test_completed_quest_contributes_its_items():
    quests = [_quest("q1", **{"metalParts": 10, "springs": 5})]
    tracker = ProgressTracker()

    assert calculate_completed_requirements(tracker.progress, quests, [], []) == {}

    tracker.complete_quest("q1")
    assert calculate_completed_requirements(tracker.progress, quests, [], []) == {
        "metalParts": 10,
        "springs": 5,
    }


def test_incomplete_progress_entries_are_ignored():
    quests = [_quest("q1", a=1)]
    progress = GameProgress.from_dict(
        {"quests": {"q1": {"questId": "q1", "completed": False, "completedAt": None}}}
    )
    assert calculate_completed_requirements(progress, quests, [], []) == {}


def test_progress_for_unknown_entities_is_harmless():
    tracker = ProgressTracker()
    tracker.complete_quest("ghost")
    tracker.complete_hideout_level("nowhere", 4)
    tracker.complete_project_phase("nothing", 2)

    assert calculate_completed_requirements(tracker.progress, [Quest(id="q1")], [], []) == {}


def test_hideout_levels_are_judged_independently():
    tracker = ProgressTracker()
    tracker.complete_hideout_level("scrappy", 1)
    tracker.complete_hideout_level("scrappy", 2)

    completed = calculate_completed_requirements(tracker.progress, [], [_scrappy()], [])
    assert completed == {"dog-collar": 1, "lemon": 3}
    assert "metal-parts" not in completed


def test_later_level_without_earlier_level_still_counts():
    tracker = ProgressTracker()
    tracker.complete_hideout_level("scrappy", 3)

    completed = calculate_completed_requirements(tracker.progress, [], [_scrappy()], [])
    assert completed == {"metal-parts": 50}


def test_completed_project_phases():
    tracker = ProgressTracker()
    tracker.complete_project_phase("expedition", 1)
    tracker.complete_project_phase("expedition", 2)

    completed = calculate_completed_requirements(tracker.progress, [], [], [_expedition()])
    assert completed == {"spring": 15}


def test_remaining_clamps_at_zero():
    assert calculate_remaining_requirements({"a": 50}, {"a": 50}) == {}
    assert calculate_remaining_requirements({"a": 50}, {"a": 70}) == {}


def test_remaining_passthrough():
    assert calculate_remaining_requirements({"a": 100}, {}) == {"a": 100}
    assert calculate_remaining_requirements({}, {"a": 50}) == {}
    assert calculate_remaining_requirements({"a": 100, "b": 2}, {"a": 40, "c": 9}) == {"a": 60, "b": 2}


def test_quest_scenario_end_to_end():
    quests = [
        _quest("q1", **{"metal-parts": 10, "spring": 5}),
        _quest("q2", **{"metal-parts": 20}),
        _quest("q3", **{"metal-parts": 100}),
    ]
    tracker = ProgressTracker()
    tracker.complete_quest("q1")
    tracker.complete_quest("q2")

    total = calculate_item_requirements(quests, [], [])
    completed = calculate_completed_requirements(tracker.progress, quests, [], [])
    remaining = calculate_remaining_requirements(total, completed)

    assert total == {"metal-parts": 130, "spring": 5}
    assert completed == {"metal-parts": 30, "spring": 5}
    assert remaining == {"metal-parts": 100}


def test_breakdown_splits_by_source():
    quests = [_quest("q1", **{"metal-parts": 10})]
    breakdown = requirement_breakdown("metal-parts", quests, [_scrappy()], [_expedition()])
    assert breakdown == {"quests": 10, "hideout": 50, "projects": 5, "total": 65}

    assert requirement_breakdown("unknown", quests, [], []) == {
        "quests": 0,
        "hideout": 0,
        "projects": 0,
        "total": 0,
    }
