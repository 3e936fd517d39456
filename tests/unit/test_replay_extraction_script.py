from scripts.replay_extraction import replay


def test_replay_reports_mismatches_against_operator_values():
    outcomes = replay(
        [
            {
                "name": "z-serial",
                "reply": {"serialCandidates": ["C02Z71ZZJHD5"], "batteryPercent": 90},
                "expected": {"serial": "C02271ZZJHD5", "battery": "90%"},
            },
            {"reply": {"modelCandidates": ["MLJH3 J/A"]}, "expected": {"model_number": "MLJH3 J/A"}},
        ]
    )

    assert outcomes[0].name == "z-serial"
    assert outcomes[0].mismatches == {"serial": ("C02Z71ZZJHD5", "C02271ZZJHD5")}
    assert any("'Z'" in w for w in outcomes[0].warnings)
    assert outcomes[1].name == "sample-2"
    assert outcomes[1].mismatches == {}


def test_replay_handles_missing_reply():
    outcomes = replay([{}])

    assert outcomes[0].fields == {}
    assert outcomes[0].warnings == []
