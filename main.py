# main.py
from dijkstra_map.app.build import build_map

MAP = {
    "name": "demo",
    "grids": [
        {"kind": "square", "bounds": [0, 0, 6, 4], "terrain": 0, "diagonal_cost": 1.5},
    ],
}


def run(goal=(5, 3), start=(0, 0)):
    built = build_map(MAP)
    dmap, cells = built.dmap, built.grids[0]
    ids_to_cell = {pid: cell for cell, pid in cells.items()}

    # a wall of mud down the middle column
    for y in range(3):
        dmap.set_terrain_for_point(cells[(3, y)], 1)

    dmap.recalculate(cells[goal], terrain_weights={0: 1.0, 1: 4.0})

    path = dmap.shortest_path_from(cells[start])
    print("cost:", dmap.cost_at(cells[start]))
    print("path:", [ids_to_cell[p] for p in path])


if __name__ == "__main__":
    run()
