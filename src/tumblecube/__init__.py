"""
tumblecube: a tumbling-cube puzzle explorer and scenario generator

A polycube piece inside a small bounding cube tumbles across a square board,
pivoting 90 degrees over one of its footprint edges with every move. The
package provides the geometry of the tumbles, move validation against the
board edges and blocked cells, a greedy direction-cycling puzzle explorer and
a random scenario generator.

Example Usage:
```python
from tumblecube.core.config import load_config
from tumblecube.runner import ScenarioRunner

config = load_config("configs/default.yaml")
runner = ScenarioRunner(config)
runner.setup()
result = runner.run_single_game()
```

Command-line Usage:
```bash
tumblecube run --config configs/default.yaml
tumblecube benchmark --config configs/default.yaml --num-runs 10
tumblecube show-piece
```
"""

from tumblecube.core.config import Config, load_config, validate_config
from tumblecube.game.controller import GameController
from tumblecube.runner import ScenarioRunner

__version__ = "0.1.0"

__all__ = [
    "Config",
    "load_config",
    "validate_config",
    "GameController",
    "ScenarioRunner",
]
