from __future__ import annotations

import itertools

import pytest

from modules.checklist.conclusion import (
    ALL_CLEAR,
    CABLE_SENTENCES,
    ISSUES_LEAD_IN,
    MACHINES_ISSUE,
    NETWORK_POINTS_ISSUE,
    NO_FIREWALL_WARNING,
    SATISFACTION_ISSUE,
    generate_conclusion,
)
from modules.checklist.models import (
    AntennaGroup,
    CableCondition,
    Custom,
    FirewallVendor,
    Known,
    SwitchGroup,
)


def test_reference_example(make_record):
    record = make_record(
        switches=(SwitchGroup(quantity=2),),
        cable_condition=CableCondition.parse("Organizado"),
    )
    text = generate_conclusion(record)

    assert text.startswith('A visita técnica realizada em 15/03/2024 ao local "CSC" ')
    assert "2 switch(es) de rede e 0 antena(s)" in text
    assert CABLE_SENTENCES[CableCondition.ORGANIZED] in text
    assert NO_FIREWALL_WARNING in text
    assert text.endswith(ALL_CLEAR)
    assert ISSUES_LEAD_IN not in text


def test_is_pure(make_record):
    record = make_record(switches=(SwitchGroup(quantity=3),), has_firewall=True)
    assert generate_conclusion(record) == generate_conclusion(record)


def test_counts_sum_quantities(make_record):
    record = make_record(
        switches=(SwitchGroup(quantity=2), SwitchGroup(quantity=5)),
        antennas=(AntennaGroup(quantity=4), AntennaGroup(quantity=1), AntennaGroup(quantity=3)),
    )
    assert "7 switch(es) de rede e 8 antena(s) Wi-Fi. " in generate_conclusion(record)


def test_empty_lists_count_zero(make_record):
    assert "0 switch(es) de rede e 0 antena(s)" in generate_conclusion(make_record())


@pytest.mark.parametrize("condition", list(CableCondition))
def test_exactly_one_cable_sentence(make_record, condition):
    text = generate_conclusion(make_record(cable_condition=condition))
    fired = [c for c, sentence in CABLE_SENTENCES.items() if sentence in text]
    assert fired == [condition]


def test_disorganized_wording(make_record):
    text = generate_conclusion(make_record(cable_condition=CableCondition.DISORGANIZED))
    assert "crítica (Desorganizada), necessitando de intervenção" in text


@pytest.mark.parametrize(
    "working, status",
    [(True, "operacional"), (False, "com falhas registradas")],
)
def test_firewall_present(make_record, working, status):
    record = make_record(
        has_firewall=True,
        firewall_brand=Known(FirewallVendor.SONICWALL),
        firewall_working=working,
    )
    text = generate_conclusion(record)
    assert f"gerida por firewall SonicWall, estando atualmente {status}. " in text
    assert NO_FIREWALL_WARNING not in text


def test_custom_firewall_brand_is_named(make_record):
    record = make_record(has_firewall=True, firewall_brand=Custom("pfSense"))
    assert "firewall pfSense," in generate_conclusion(record)


@pytest.mark.parametrize(
    "machines_ok, points_ok, satisfied",
    list(itertools.product([True, False], repeat=3)),
)
def test_issue_list_order(make_record, machines_ok, points_ok, satisfied):
    record = make_record(
        all_machines_ok=machines_ok,
        network_points_ok=points_ok,
        employees_satisfied=satisfied,
    )
    text = generate_conclusion(record)

    expected = [
        phrase
        for flag, phrase in (
            (machines_ok, MACHINES_ISSUE),
            (points_ok, NETWORK_POINTS_ISSUE),
            (satisfied, SATISFACTION_ISSUE),
        )
        if not flag
    ]
    if expected:
        assert text.endswith(f"{ISSUES_LEAD_IN}{', '.join(expected)}. ")
        assert ALL_CLEAR not in text
    else:
        assert text.endswith(ALL_CLEAR)
