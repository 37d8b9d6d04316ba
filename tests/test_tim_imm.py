import math

import pytest

from influmax.graph import build_graph
from influmax.reverse_cascade import ReverseGeneralCascade
from influmax.rng import RandomSource
from influmax.tim_imm import IMM, TimPlus

LEAVES = ["l1", "l2", "l3", "l4"]


def _hub_graph():
    lines = ["5 4"]
    for leaf in LEAVES:
        lines.append(f"hub {leaf} 0 0")
    for leaf in LEAVES:
        lines.append(f"{leaf} hub 0 1")
    return build_graph(lines)


def _paths(tmp_path, stem):
    return str(tmp_path / f"{stem}.txt"), str(tmp_path / f"time_{stem}.txt")


def test_step_threshold_inverse_in_lower_bound():
    tp = TimPlus()
    assert tp.step_threshold(100, 0.25, 1.0) == pytest.approx(
        2 * tp.step_threshold(100, 0.5, 1.0)
    )


def test_r_threshold_with_zero_k_is_four_times_r_threshold_0():
    tp = TimPlus()
    tp.n = 50
    assert tp.r_threshold(0.2, 7.0, 0, 1.0) == pytest.approx(
        4 * tp.r_threshold_0(0.2, 7.0, 1.0)
    )


def test_r_threshold_0_halves_when_opt_doubles():
    tp = TimPlus()
    tp.n = 30
    assert tp.r_threshold_0(0.1, 10.0) == pytest.approx(2 * tp.r_threshold_0(0.1, 20.0))


def test_eps_prime_with_zero_k():
    tp = TimPlus()
    assert tp.eps_prime(1.0, 0, 1.0) == pytest.approx(5.0)


def test_eps_prime_decreases_with_k():
    tp = TimPlus()
    assert tp.eps_prime(0.1, 10, 1.0) < tp.eps_prime(0.1, 1, 1.0)


def test_lambda_star_scales_with_inverse_eps_squared():
    imm = IMM()
    assert imm.lambda_star(0.1, 3, 1.0, 100) == pytest.approx(
        4 * imm.lambda_star(0.2, 3, 1.0, 100)
    )


def test_lambda_star_symmetric_in_k():
    imm = IMM()
    assert imm.lambda_star(0.3, 0, 1.0, 20) == pytest.approx(
        imm.lambda_star(0.3, 20, 1.0, 20)
    )


def test_lambda_prime_decreases_with_epsprime():
    imm = IMM()
    assert imm.lambda_prime(0.1, 2, 1.0, 50) > imm.lambda_prime(0.2, 2, 1.0, 50)


def test_lambda_star_rejects_k_above_n():
    imm = IMM()
    with pytest.raises(ValueError):
        imm.lambda_star(0.1, 6, 1.0, 5)


def test_default_file_names():
    tp = TimPlus()
    imm = IMM()
    assert (tp.output_file, tp.time_file) == (
        "rr_timplus_infl.txt",
        "time_rr_timplus_infl.txt",
    )
    assert (imm.output_file, imm.time_file) == ("rr_imm_infl.txt", "time_rr_imm_infl.txt")


def test_timplus_build_picks_hub(tmp_path):
    graph = _hub_graph()
    out, tfile = _paths(tmp_path, "tim")
    tp = TimPlus(out, tfile)
    tp.build(graph, 1, ReverseGeneralCascade(RandomSource(1)), eps=0.5, ell=1.0)
    hub = graph.map_node_name_to_index("hub")
    assert tp.seeds == [hub]
    assert tp.influence[0] == pytest.approx(5.0)
    with open(out, encoding="utf-8") as fh:
        assert fh.read().splitlines() == ["1", "hub\t5"]
    with open(tfile, encoding="utf-8") as fh:
        lines = fh.read().splitlines()
    assert len(lines) == 7
    assert float(lines[0]) >= 0.0


def test_imm_build_two_seeds(tmp_path):
    graph = _hub_graph()
    out, tfile = _paths(tmp_path, "imm")
    imm = IMM(out, tfile)
    imm.build(graph, 2, ReverseGeneralCascade(RandomSource(2)), eps=0.5, ell=1.0, mode=0)
    hub = graph.map_node_name_to_index("hub")
    assert imm.seeds[0] == hub
    assert len(set(imm.seeds)) == 2
    assert imm.influence[0] == pytest.approx(5.0)
    assert imm.influence[1] == pytest.approx(0.0)
    with open(tfile, encoding="utf-8") as fh:
        lines = fh.read().splitlines()
    assert lines[-1].startswith("  Final Step:")


@pytest.mark.parametrize("mode", [1, 2])
def test_imm_workaround_modes(tmp_path, mode):
    graph = _hub_graph()
    out, tfile = _paths(tmp_path, f"imm{mode}")
    imm = IMM(out, tfile)
    imm.build(graph, 1, ReverseGeneralCascade(RandomSource(3)), eps=0.5, ell=1.0, mode=mode)
    assert imm.seeds == [graph.map_node_name_to_index("hub")]
    assert len(imm.table) == len(imm.targets)
    assert all(graph.map_node_name_to_index("hub") in rr for rr in imm.table)


def test_build_rejects_single_node_graph(tmp_path):
    graph = build_graph(["1 0"])
    out, tfile = _paths(tmp_path, "one")
    with pytest.raises(ValueError):
        IMM(out, tfile).build(graph, 1, ReverseGeneralCascade(RandomSource(0)))
    assert math.isfinite(IMM().lambda_star(0.1, 1, 1.0, 2))