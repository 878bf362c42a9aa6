"""Match systems package.

Each system has a single responsibility and follows the BaseSystem
contract. One match tick runs them in this order:

```
frame start   clock, radius schedule, pre-clamp      (engine)
motion        MotionSystem
spatial index grid rebuild                           (engine)
combat        CombatSystem
consumption   ConsumptionSystem
controllers   ControllerSystem
match state   MatchStateSystem
cull          CullSystem
```

Once the match has ended only the clock and CullSystem advance.
"""

from royale.systems.adaptive import ControllerSystem
from royale.systems.base import BaseSystem, SystemResult
from royale.systems.combat import CombatSystem
from royale.systems.consumption import ConsumptionSystem
from royale.systems.cull import CullSystem
from royale.systems.match_state import MatchStateSystem
from royale.systems.motion import MotionSystem

__all__ = [
    "BaseSystem",
    "SystemResult",
    "MotionSystem",
    "CombatSystem",
    "ConsumptionSystem",
    "ControllerSystem",
    "MatchStateSystem",
    "CullSystem",
]
