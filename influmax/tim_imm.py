"""TIM+ and IMM: RR-set influence maximisation with adaptive sample sizes."""

from __future__ import annotations

import math
from collections.abc import Iterable

from influmax.graph import Graph
from influmax.reverse_cascade import ReverseGeneralCascade
from influmax.rr_base import RRInflBase, log_n_choose_k
from influmax.timer import EventTimer

_SMALL_DOUBLE = 1e-16
_APPROX_RATIO = 1.0 - 1.0 / math.e


def _write_lines(filename: str, lines: Iterable[str]) -> None:
    with open(filename, "w", encoding="utf-8") as fh:
        for line in lines:
            fh.write(line + "\n")


def _require_nodes(n: int) -> None:
    # The failure-probability correction divides by log(n).
    if n < 2:
        raise ValueError(f"graph needs at least two nodes, got n = {n}")


class TimPlus(RRInflBase):
    """TIM+ algorithm: estimate OPT, refine it greedily, then sample the final RR sets."""

    DEFAULT_OUTPUT_FILE = "rr_timplus_infl.txt"
    DEFAULT_TIME_FILE = "time_rr_timplus_infl.txt"

    def _prepare(self, graph: Graph, k: int, cascade: ReverseGeneralCascade) -> None:
        self.n = graph.n
        self.m = graph.m
        _require_nodes(self.n)
        self.top = k
        self.influence = [0.0] * k
        self.seeds = [0] * k
        cascade.build(graph)
        self.table = []
        self.targets = []

    def build(
        self,
        graph: Graph,
        k: int,
        cascade: ReverseGeneralCascade,
        eps: float = 0.1,
        ell: float = 1.0,
    ) -> None:
        """Select k seeds with approximation error eps and confidence parameter ell."""
        self._prepare(graph, k, cascade)
        n, m = self.n, self.m
        # Turn a failure probability of 2/n^ell into 1/n^ell.
        ell = ell + math.log(2) / math.log(n)

        timer = EventTimer()
        est_timer = EventTimer()
        timer.set_event("start")

        # Step 1: estimate the expected spread of a random RR set's width.
        print("Step 1: estimate EPT")
        est_timer.set_event("est_start")
        est_opt1 = 0.0
        round1 = 0
        max_ith = math.ceil(math.log(n) / math.log(2) - 1)
        for ith in range(1, max_ith):
            lb = 0.5**ith
            loop = int(self.step_threshold(n, lb, ell) + 1)
            edge_visits = self.add_rr_simulation(loop, cascade)
            round1 += loop
            sum_kappa = 0.0
            for visit in edge_visits:
                width = visit / m if m else 0.0
                sum_kappa += 1.0 - (1.0 - width) ** k
            if sum_kappa / loop > lb:
                est_opt1 = n * sum_kappa / loop
                break
        est_opt1 = max(est_opt1, float(k))
        est_timer.set_event("est_end")
        print(f"  est_opt1 = {est_opt1:g}\t round1 = {round1}")
        timer.set_event("step1")
        span = est_timer.time_span("est_start", "est_end")
        time_per_round = span / round1 if round1 else 0.0
        print(f"  (Time per round = {time_per_round:g})")

        # Step 2: refine the OPT lower bound with a greedy run.
        eps_step2 = self.eps_prime(eps, k, ell)
        theta = self.r_threshold_0(eps, est_opt1, ell)
        round2 = int(max(theta + 1.0, 1.0))
        print(f"Step 2: estimate opt by greedy. round = {round2}")
        print(f"  (Estimate time = {time_per_round * round2:g})")
        self.add_rr_simulation(round2, cascade)
        self.rebuild_rr_indices()
        spd2, _, _ = self.run_greedy(k)
        est_opt2 = max(spd2 / (1 + eps_step2), est_opt1)
        print(f"  est_opt2 = {est_opt2:g}\t round2 = {round2}")
        timer.set_event("step2")

        # Step 3: final sampling and greedy selection.
        theta = self.r_threshold(eps, est_opt2, k, ell)
        round3 = int(max(theta + 1.0, 1.0))
        print(f"Step 3: final greedy. round = {round3}")
        print(f"  (Estimate time = {time_per_round * round3:g})")
        timer.set_event("step3-1")
        self.add_rr_simulation(round3, cascade)
        timer.set_event("step3-2")
        self.rebuild_rr_indices()
        timer.set_event("step3-3")
        spd3, seeds3, est_spread3 = self.run_greedy(self.top)
        print(f"  final spread = {spd3:g}\t round3 = {round3}")
        self.set_results(seeds3, est_spread3)
        timer.set_event("end")

        self.write_to_file(self.output_file, graph)
        _write_lines(
            self.time_file,
            [
                f"{timer.time_span('start', 'end'):g}",
                f"Step1: {timer.time_span('start', 'step1'):g}",
                f"Step2: {timer.time_span('step1', 'step2'):g}",
                f"Step3: {timer.time_span('step2', 'end'):g}",
                f"   Step3-1: {timer.time_span('step3-1', 'step3-2'):g}",
                f"   Step3-2: {timer.time_span('step3-2', 'step3-3'):g}",
                f"   Step3-3: {timer.time_span('step3-3', 'end'):g}",
            ],
        )

    def step_threshold(self, n: int, lb: float, ell: float = 1.0) -> float:
        """Number of RR sets sampled in one step of the OPT estimation."""
        log_value = max(math.log(n) / math.log(2.0), 1.0)
        return (6.0 * ell * math.log(n) + 6.0 * math.log(log_value)) / lb

    def r_threshold_0(self, eps: float, opt: float, ell: float = 1.0) -> float:
        """Number of RR sets for the greedy refinement of OPT."""
        n = self.n
        lam = (8 + 2 * eps) * n * (ell * math.log(n) + math.log(2)) / (eps * eps)
        return lam / (opt * 4.0)

    def r_threshold(self, eps: float, opt: float, k: int, ell: float = 1.0) -> float:
        """Number of RR sets for the final selection."""
        n = self.n
        lam = (
            (8 + 2 * eps)
            * n
            * (ell * math.log(n) + log_n_choose_k(n, k) + math.log(2))
            / (eps * eps)
        )
        return lam / opt

    def eps_prime(self, eps: float, k: int, ell: float = 1.0) -> float:
        """Error parameter used when refining OPT."""
        return 5.0 * (eps * eps * ell / (ell + k)) ** (1.0 / 3.0)


class IMM(TimPlus):
    """IMM algorithm with optional workarounds for the known sampling issue.

    mode 0 is the original algorithm, mode 1 regenerates the RR sets in the
    final step, mode 2 enlarges ell by a searched gamma.
    """

    DEFAULT_OUTPUT_FILE = "rr_imm_infl.txt"
    DEFAULT_TIME_FILE = "time_rr_imm_infl.txt"

    def _sample_and_select(self, count: int, cascade: ReverseGeneralCascade) -> float:
        self.add_rr_simulation(count, cascade)
        self.rebuild_rr_indices()
        spread, seeds, estimates = self.run_greedy(self.top)
        self.set_results(seeds, estimates)
        return spread

    def _search_gamma(self, eps: float, k: int, ell: float, n: int) -> float:
        lgamma, rgamma = 0.0, 2.0
        while math.ceil(self.lambda_star(eps, k, ell + rgamma, n)) > n**rgamma:
            lgamma = rgamma
            rgamma *= 2
        while rgamma > lgamma + 0.1:
            gamma = (lgamma + rgamma) / 2
            if math.ceil(self.lambda_star(eps, k, ell + gamma, n)) > n**gamma:
                lgamma = gamma
            else:
                rgamma = gamma
        return rgamma

    def build(
        self,
        graph: Graph,
        k: int,
        cascade: ReverseGeneralCascade,
        eps: float = 0.1,
        ell: float = 1.0,
        mode: int = 0,
    ) -> None:
        """Select k seeds with approximation error eps and confidence parameter ell."""
        timer = EventTimer()
        step_timers: list[EventTimer] = []
        timer.set_event("start")

        self._prepare(graph, k, cascade)
        n = self.n

        epsprime = eps * math.sqrt(2.0)
        lower_bound = 1.0
        max_rounds = max(max(math.log2(n), 1.0) - 1.0, 1.0)

        if mode == 2:
            gamma = self._search_gamma(eps, k, ell, n)
            ell += gamma
            print(f"  IMM Workaround 2: gamma = {gamma:g}")

        ell = ell + math.log(2) / math.log(n)

        spread = 0.0
        for r in range(1, math.ceil(max_rounds)):
            step = EventTimer()
            step.set_event("step_start")
            print(f"  Step{r}:")
            x = max(n / 2**r, 1.0)
            theta = self.lambda_prime(epsprime, k, ell, n) / x
            new_samples = int(theta - len(self.table) + 1)
            if len(self.table) < theta:
                spread = self._sample_and_select(new_samples, cascade)
            print(f" spread = {spread:g}\t round = {max(new_samples, 0)}")
            step.set_event("step_end")
            step_timers.append(step)
            if spread >= (1.0 + epsprime) * x:
                lower_bound = spread / (1.0 + epsprime)
                break

        step = EventTimer()
        step.set_event("step_start")
        print(f"  Estimated Lower bound: {lower_bound:g}")
        print("  Final Step:")
        theta = self.lambda_star(eps, k, ell, n) / lower_bound
        if mode == 1:
            new_samples = int(theta + 1)
            print(
                "  IMM Workaround 1 --- Regenerating RR sets, "
                f"# RR sets = {new_samples}"
            )
            self.table = []
            self.targets = []
            spread = self._sample_and_select(new_samples, cascade)
        else:
            new_samples = max(int(theta - len(self.table) + 1), 0)
            print(
                "  Original IMM without regenerating RR sets, "
                f"# new RR sets needed = {new_samples}"
            )
            if len(self.table) < theta:
                spread = self._sample_and_select(new_samples, cascade)
        print(f" spread = {spread:g}")
        step.set_event("step_end")
        step_timers.append(step)
        timer.set_event("end")

        self.write_to_file(self.output_file, graph)
        lines = [f"{timer.time_span('start', 'end'):g}"]
        last = len(step_timers) - 1
        for t, st in enumerate(step_timers):
            span = st.time_span("step_start", "step_end")
            if t != last:
                lines.append(f"  Step{t + 1}: {span:g}")
            else:
                lines.append(f"  Final Step: {span:g}")
        _write_lines(self.time_file, lines)

    def lambda_prime(self, epsprime: float, k: int, ell: float, n: int) -> float:
        """lambda' used to size the sampling rounds that estimate a lower bound."""
        cst = (2.0 + 2.0 / 3.0 * epsprime) / max(epsprime * epsprime, _SMALL_DOUBLE)
        part2 = log_n_choose_k(n, k)
        part2 += ell * math.log(max(float(n), 1.0))
        part2 += math.log(max(math.log2(max(float(n), 1.0)), 1.0))
        return cst * part2 * n

    def lambda_star(self, eps: float, k: int, ell: float, n: int) -> float:
        """lambda* used to size the final sampling round."""
        logsum = ell * math.log(n) + math.log(2)
        alpha = math.sqrt(max(logsum, _SMALL_DOUBLE))
        beta = math.sqrt(_APPROX_RATIO * (log_n_choose_k(n, k) + logsum))
        lam = 2.0 * n / max(eps**2, _SMALL_DOUBLE)
        return lam * (_APPROX_RATIO * alpha + beta) ** 2