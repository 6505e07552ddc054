"""Language Strings — centralized locale-specific UI text.

Invariants:
    - All strings are pure data (no IO, no computation beyond lookup)
    - Every Locale has the same key set in every section
    - Status message keys match SessionState.status_key

Design Decisions:
    - One nested table per locale: the front-end fetches a whole table once
      and renders labels, legend and help messages from it
    - get_ui_strings returns a deep copy so callers can never mutate the tables
"""

import copy

from graphwalk.core.domain_types import Locale


_UI_STRINGS: dict[Locale, dict[str, dict[str, str] | str]] = {
    Locale.FR: {
        "title": "Visualisateur de Graphe",
        "graph_types": {
            "undirected": "Non Orienté",
            "directed": "Orienté",
            "weighted": "Pondéré",
        },
        "algorithms": {
            "title": "Algorithme",
            "none": "Aucun",
            "dfs": "Parcours en profondeur (DFS)",
            "bfs": "Parcours en largeur (BFS)",
            "dijkstra": "Dijkstra",
        },
        "buttons": {
            "reset": "Réinitialiser",
            "remove_start": "Retirer le nœud de départ",
            "run_algorithm": "Lancer l'Algorithme",
            "cancel_run": "Arrêter",
        },
        "messages": {
            "start_node": "Nœud de départ",
            "add_nodes": (
                "Cliquez sur le canevas pour ajouter des nœuds. Cliquez sur "
                "deux nœuds pour les connecter. Ensuite, sélectionnez un "
                "algorithme."
            ),
            "select_start": "Sélectionnez un nœud de départ pour l'algorithme.",
            "running": "L'algorithme est en cours d'exécution...",
            "ready_to_run": (
                "Cliquez sur \"Lancer l'Algorithme\" pour commencer la "
                "visualisation."
            ),
        },
        "legend": {
            "title": "Légende :",
            "unvisited": "Non visité",
            "visiting": "En cours",
            "visited": "Visité",
        },
    },
    Locale.EN: {
        "title": "Graph Visualizer",
        "graph_types": {
            "undirected": "Undirected",
            "directed": "Directed",
            "weighted": "Weighted",
        },
        "algorithms": {
            "title": "Algorithm",
            "none": "None",
            "dfs": "DFS",
            "bfs": "BFS",
            "dijkstra": "Dijkstra",
        },
        "buttons": {
            "reset": "Reset",
            "remove_start": "Remove Start Node",
            "run_algorithm": "Run Algorithm",
            "cancel_run": "Stop",
        },
        "messages": {
            "start_node": "Start Node",
            "add_nodes": (
                "Click on canvas to add nodes. Click two nodes to connect "
                "them. Then select an algorithm."
            ),
            "select_start": "Select a start node for the algorithm.",
            "running": "Algorithm is running...",
            "ready_to_run": 'Click "Run Algorithm" to start visualization.',
        },
        "legend": {
            "title": "Legend:",
            "unvisited": "Unvisited",
            "visiting": "Visiting",
            "visited": "Visited",
        },
    },
}


# --- Public API ---------------------------------------------------------------


def get_ui_strings(locale: Locale) -> dict:
    """Full string table for a locale (copy, safe to mutate)."""
    return copy.deepcopy(_UI_STRINGS[locale])


def get_message(locale: Locale, key: str) -> str:
    """Help message by key (add_nodes, select_start, running, ready_to_run, ...)."""
    return _UI_STRINGS[locale]["messages"][key]
