"""Max-flow algorithms over `ResidualGraph`.

Modules:
    bfs: sequential shortest augmenting path search.
    parallel_bfs: layered frontier search on a thread pool.
    max_flow: Edmonds-Karp driver, min-cut extraction and summaries.
    types: enums and result containers shared by the above.
"""
