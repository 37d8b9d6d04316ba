# influmax

Influence maximization on directed social graphs, in pure Python.

Given a graph whose edges carry propagation probabilities, `influmax`
picks a small set of seed nodes that spreads influence as widely as
possible. The package uses only the standard library.

## What is in the package

- `influmax.graph`: `Graph`, `read_graph` and `build_graph`.
  - `build_graph` reads a graph, sorts its edges by `(u, v)`, merges
    duplicates (counting them in `Edge.c`) and builds the per-node index.
- `influmax.edges`: `Node`, `Edge`, `ContEdge`, `EdgeForm` and
  `ProbTransform`.
  - `ProbTransform` turns stored weights into probabilities.
- `influmax.cascades`: forward diffusion models. Each one estimates the
  expected spread of a seed set by Monte Carlo simulation through
  `run(num_iter, seeds)`.
  - `IndependentCascade`: every edge fires with the same `ratio`.
  - `GeneralCascade`: each edge fires with its own probability `w1`.
  - `ContinuousGeneralCascade`: Weibull-distributed delays that stop at
    `max_time`. Its edges must be `ContEdge`. Seeds are counted once when
    they are scheduled and again when they are activated.
- `influmax.reverse_cascade`: `ReverseGeneralCascade` samples
  reverse-reachable (RR) sets, using each edge's `w2` as its probability.
- Seed selection:
  - `influmax.greedy.Greedy`: greedy selection with lazy-forward
    evaluation (`build`), a ranking of nodes by their individual spread
    (`build_ranking`), or loading from a file (`build_from_file`).
  - `influmax.rr_base.RRInfl`: RR-set selection, either with a fixed
    number of rounds (`build`) or with as many rounds as a given error
    needs (`build_in_error`).
  - `influmax.tim_imm.TimPlus` and `influmax.tim_imm.IMM`: RR-set
    selection with adaptive sample sizes. The `mode` argument of
    `IMM.build` picks the variant:
    - `0`: the original algorithm.
    - `1`: regenerate the RR sets in the final step.
    - `2`: widen `ell` by a searched gamma.
- `influmax.graph_stat.compute_statistics`: vertices, edges, density,
  degrees and connected components. The result's `format()` renders them
  as report lines.
- `influmax.simulate.Simulator`: spread of a seed list, or of each of its
  prefixes, under any cascade.
- `influmax.seed_io`: readers and writers for seed files.
- `influmax.rng.RandomSource`: random draws. Pass it a seed to make a run
  reproducible.
- `influmax.rng` also has exponential and Weibull PDF/CDF helpers.
- `influmax.timer.EventTimer`: records named time points.

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Graph file format

Blank lines and lines starting with `#` are ignored. The first line holds
`n m`: the number of nodes and the number of undirected edges. The next
`2*m` lines each hold one directed edge:

```
# n m
3 2
a b 0.5 0.5
b a 0.5 0.5
b c 0.2 0.2
c b 0.2 0.2
```

The columns are the source label, the target label, `w1` (the probability
from u to v) and `w2` (the probability from v to u). Continuous edges
(`ContEdge`) carry four Weibull parameters before the two weights:
`u v u_a u_b v_a v_b w1 w2`.

Node labels are arbitrary strings. They are mapped to indices in the
order they are first seen.

- If fewer than `n` labels occur, the missing nodes are added as
  `isolated_1`, `isolated_2`, and so on.
- `InvalidInputFormatError` is raised if the file holds more than `n`
  distinct labels.
- `InvalidInputFormatError` is also raised if the file does not hold
  exactly `2*m` edge lines.

## Example

```python
from influmax.edges import Edge
from influmax.graph import build_graph
from influmax.rng import RandomSource
from influmax.cascades import GeneralCascade
from influmax.reverse_cascade import ReverseGeneralCascade
from influmax.tim_imm import IMM
from influmax.simulate import Simulator
from influmax.graph_stat import compute_statistics

with open("graph.txt") as stream:
    graph = build_graph(stream, Edge)

print(compute_statistics(graph).format())

# Choose 10 seeds with IMM using reverse-reachable sets.
reverse = ReverseGeneralCascade(RandomSource(42))
imm = IMM()
imm.build(graph, 10, reverse, 0.1, 1.0, 0)

# Check the estimated spread by forward simulation.
cascade = GeneralCascade(RandomSource(7))
cascade.build(graph)
simulator = Simulator([imm.seed(i) for i in range(10)], "", 10, 1000)
print(simulator.simulate_once(cascade))
```

`TimPlus` and `IMM` need a graph with at least two nodes.

## Output files

The selection algorithms write their results to the current directory.

| Class | Seed file | Timing file |
| --- | --- | --- |
| `Greedy` | `greedy.txt` | none |
| `RRInfl` | `rr_infl.txt` | `time_rr_infl.txt` |
| `TimPlus` | `rr_timplus_infl.txt` | `time_rr_timplus_infl.txt` |
| `IMM` | `rr_imm_infl.txt` | `time_rr_imm_infl.txt` |

- Seed files are written in the seed-file format below, with the marginal
  influence of each seed.
- Pass `output_file` and `time_file` to the constructor to write
  somewhere else (`Greedy` takes only `output_file`).
- The RR-set algorithms also print their progress to standard output.

## Seed files

A seed file starts with the number of seeds. Each following line holds a
node label and, optionally, the influence of that seed. `#` comment
lines are allowed anywhere.

- To write a seed file, use `write_seeds` or `write_seeds_file`.
- To read one back, use `read_seeds`, `read_seeds_with_influence` or
  their `*_file` variants.
- `read_seeds_with_influence` gives `-1` as the influence of any seed
  that has none.

These functions map labels to node indices through the graph. An unknown
label raises `InvalidInputFormatError`, and so does a file that does not
hold the number of seeds it declares.

## Errors

- Running a cascade or a reverse cascade before `build` raises
  `GraphNotBuiltError`.
- Malformed graph or seed input raises `InvalidInputFormatError`.

## What the package does not do

- It is a library only. There is no command-line program; load graphs and
  run the algorithms from Python.
- Seed selection does not take time into account: no algorithm assigns
  seeds to rounds.
- All simulations run in a single thread.