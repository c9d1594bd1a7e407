import pytest

from seamcut.algorithms.max_flow import FlowSolver, calc_max_flow
from seamcut.algorithms.parallel_bfs import ParallelFrontierSearch
from seamcut.algorithms.types import FlowSummary, SearchStrategy, SolverState
from seamcut.config import ParallelSearchConfig
from seamcut.errors import InvalidNodeIndex
from seamcut.graph.residual_graph import INFINITE_CAPACITY, ResidualGraph

UNBOUNDED = ParallelSearchConfig(worker_count=4, max_depth=None)


def assert_capacity_conserved(graph):
    for e in graph.edges():
        assert e.residual + e.reverse.residual == e.capacity
        assert 0 <= e.residual <= e.capacity


class TestMaxFlowBasic:
    def test_four_node_scenario(self, four_node):
        """Two augmenting paths give flow 4 and saturate 1 -> 2."""
        solver = FlowSolver(four_node, 0, 2)
        assert solver.solve() == 4

        one_two = list(four_node.edges())[1]
        assert (one_two.src, one_two.dst) == (1, 2)
        assert one_two.residual == 0
        assert one_two in solver.saturated_edges()

    def test_line1_parallel_edges(self, line1):
        """Parallel edges of 1, 3 and 7 carry only what the 5-capacity feed provides."""
        assert calc_max_flow(line1, 0, 2) == 5

    def test_clrs6(self, clrs6):
        """Classic CLRS example network has max flow 23."""
        assert calc_max_flow(clrs6, 0, 5) == 23

    def test_no_path_is_zero(self, disconnected):
        """No path from source to sink means zero flow, not an error."""
        assert calc_max_flow(disconnected, 0, 3) == 0

    def test_source_equals_sink(self, four_node):
        """Identical terminals finish immediately with zero flow."""
        solver = FlowSolver(four_node, 1, 1)
        assert solver.solve() == 0
        assert solver.state == SolverState.DONE

    def test_invalid_terminal(self, four_node):
        with pytest.raises(InvalidNodeIndex):
            FlowSolver(four_node, 0, 9)

    def test_matches_networkx(self, make_graph, oracle):
        """Random multigraphs agree with networkx's maximum_flow_value."""
        for seed in range(12):
            g = make_graph(seed)
            assert calc_max_flow(g, 0, 1) == oracle(g, 0, 1), f"seed {seed}"

    def test_infinite_capacity_chain(self):
        """Only the finite edge limits its path; totals past 32 bits stay exact."""
        g = ResidualGraph(4)
        g.add_edge(0, 1, INFINITE_CAPACITY)
        g.add_edge(1, 2, 7)
        g.add_edge(2, 3, INFINITE_CAPACITY)
        g.add_edge(0, 3, INFINITE_CAPACITY)
        # Totals beyond 32 bits stay exact.
        assert calc_max_flow(g, 0, 3) == INFINITE_CAPACITY + 7


class TestSolverState:
    def test_states_and_repeat_solve(self, clrs6):
        """The solver ends in DONE and a second solve returns the stored total."""
        solver = FlowSolver(clrs6, 0, 5)
        assert solver.state == SolverState.SEARCHING
        assert solver.solve() == 23
        assert solver.state == SolverState.DONE
        augmentations = solver.augmentations
        assert solver.solve() == 23
        assert solver.augmentations == augmentations

    def test_cut_queries_require_done(self, clrs6):
        """Cut queries before solve() raise RuntimeError."""
        solver = FlowSolver(clrs6, 0, 5)
        with pytest.raises(RuntimeError):
            solver.saturated_edges()
        with pytest.raises(RuntimeError):
            solver.summary()

    def test_augment_single_path(self, four_node):
        """One manual round pushes the bottleneck of the BFS path."""
        solver = FlowSolver(four_node, 0, 2)
        assert solver.find_path()
        assert solver.augment() == 2  # direct edge 0 -> 2 is the shortest path
        assert_capacity_conserved(four_node)

    def test_augment_rejects_saturated_chain(self, four_node):
        """Augmenting along a saturated chain is refused."""
        solver = FlowSolver(four_node, 0, 2)
        assert solver.find_path()
        pred = list(solver._pred)
        solver.augment(pred)
        with pytest.raises(ValueError):
            solver.augment(pred)


class TestFlowProperties:
    def test_capacity_conservation_after_every_round(self, make_graph):
        """residual(u->v) + residual(v->u) equals capacity after each round."""
        g = make_graph(5)
        solver = FlowSolver(g, 0, 1)
        while solver.find_path():
            solver.augment()
            assert_capacity_conserved(g)

    def test_flow_bound(self, make_graph):
        """Total flow never exceeds the sum of source out-capacities."""
        for seed in range(8):
            g = make_graph(seed)
            out_of_source = sum(e.capacity for e in g.edges() if e.src == 0)
            assert calc_max_flow(g, 0, 1) <= out_of_source

    def test_max_flow_equals_min_cut(self, make_graph):
        """The cut found from residual reachability has capacity equal to the flow."""
        for seed in range(8):
            g = make_graph(seed)
            total, summary = calc_max_flow(g, 0, 1, return_summary=True)
            assert summary.cut_capacity == total
            assert all(e.src in summary.reachable for e in summary.min_cut)
            assert all(e.dst not in summary.reachable for e in summary.min_cut)
            # Every cut edge is saturated in the final residual graph.
            assert all(e.residual == 0 for e in summary.min_cut)
            assert 1 not in summary.reachable

    def test_saturation_read_from_final_state(self):
        """Saturation is judged on the final residuals, not on edges saturated mid-run."""
        # Round 1 takes 0-1-2-5 and saturates 1 -> 2. Round 2 takes
        # 0-3-2-1-4-5, pushing flow back over the reverse of 1 -> 2.
        #
        #   0 ──► 1 ──► 4 ──► 5
        #   │     │           ▲
        #   ▼     ▼           │
        #   3 ──► 2 ──────────┘
        g = ResidualGraph(6)
        g.add_edge(0, 1, 1)
        g.add_edge(0, 3, 1)
        mid = g.add_edge(1, 2, 1)
        g.add_edge(3, 2, 1)
        g.add_edge(2, 5, 1)
        g.add_edge(1, 4, 1)
        g.add_edge(4, 5, 1)

        solver = FlowSolver(g, 0, 5)
        assert solver.find_path()
        assert solver.augment() == 1
        assert mid.residual == 0

        assert solver.find_path()
        assert solver.augment() == 1
        assert not solver.find_path()
        assert_capacity_conserved(g)
        assert mid.residual == 1

        # Already at max flow; solve() only moves the solver to DONE.
        assert solver.solve() == 0
        assert mid not in solver.saturated_edges()
        assert len(solver.saturated_edges()) == 6

    def test_copy_graph_flag(self, four_node):
        """calc_max_flow leaves the input graph alone unless copy_graph=False."""
        calc_max_flow(four_node, 0, 2)
        assert all(e.residual == e.capacity for e in four_node.edges())

        calc_max_flow(four_node, 0, 2, copy_graph=False)
        assert calc_max_flow(four_node, 0, 2, copy_graph=False) == 0

    def test_summary_contents(self, four_node):
        """The summary carries the flow, the augmentation count, the source side and the cut."""
        total, summary = calc_max_flow(four_node, 0, 2, return_summary=True)
        assert isinstance(summary, FlowSummary)
        assert summary.total_flow == total == 4
        assert summary.augmentations == 2
        assert summary.reachable == frozenset({0, 1})
        assert sorted((e.src, e.dst) for e in summary.min_cut) == [(0, 2), (1, 2)]
        assert summary.strategy == SearchStrategy.BFS


class TestParallelStrategy:
    def test_matches_bfs(self, make_graph):
        """Unbounded parallel search reaches the same flow as BFS."""
        for seed in range(8):
            g = make_graph(seed)
            expected = calc_max_flow(g, 0, 1)
            got = calc_max_flow(
                g, 0, 1, strategy=SearchStrategy.PARALLEL, parallel_config=UNBOUNDED
            )
            assert got == expected, f"seed {seed}"

    def test_depth_bound_with_fallback_reaches_max_flow(self, clrs6, chain6):
        """A zero depth bound plus the BFS fallback still finds the maximum."""
        shallow = ParallelSearchConfig(worker_count=2, max_depth=0)
        assert (
            calc_max_flow(clrs6, 0, 5, strategy="parallel", parallel_config=shallow)
            == 23
        )
        solver = FlowSolver(
            chain6, 0, 6, strategy=SearchStrategy.PARALLEL, parallel_config=shallow
        )
        assert solver.solve() == 4
        assert solver.fallback_paths == 1

    def test_depth_bound_without_fallback_is_heuristic(self, shortcut):
        """Without the fallback a shallow search can stop below the maximum."""
        shallow = ParallelSearchConfig(worker_count=2, max_depth=0)
        heuristic = calc_max_flow(
            shortcut,
            0,
            2,
            strategy=SearchStrategy.PARALLEL,
            parallel_config=shallow,
            exhaustive_fallback=False,
        )
        assert heuristic == 1
        assert calc_max_flow(shortcut, 0, 2) == 6

    def test_owned_searcher_is_closed(self, clrs6):
        """A searcher created by the solver is shut down after solve()."""
        solver = FlowSolver(
            clrs6, 0, 5, strategy=SearchStrategy.PARALLEL, parallel_config=UNBOUNDED
        )
        solver.solve()
        assert solver._searcher is None

    def test_shared_searcher_stays_open(self, clrs6, four_node):
        """A caller's searcher survives several solves."""
        with ParallelFrontierSearch(UNBOUNDED) as searcher:
            a = FlowSolver(
                clrs6, 0, 5, strategy=SearchStrategy.PARALLEL, searcher=searcher
            )
            b = FlowSolver(
                four_node, 0, 2, strategy=SearchStrategy.PARALLEL, searcher=searcher
            )
            assert a.solve() == 23
            assert searcher._executor is not None
            assert b.solve() == 4

    def test_unknown_strategy(self, four_node):
        with pytest.raises(ValueError):
            FlowSolver(four_node, 0, 2, strategy="push-relabel")
