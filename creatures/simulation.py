"""Simulation context: owns the population, the RNG and the innovation registry.

Each ``step`` advances every live creature through a fixed order:

1. metabolism (basal cost and aging; may kill the creature)
2. brain evaluation of the sensed state
3. locomotion (swing angles, body pose, thrust and drag)
4. the external integrator turns forces into velocity
5. metabolism charges the movement cost
6. feeding, when the creature has room for a full food item

Ready creatures within mating range then reproduce, and dead creatures are
removed. Lifecycle events are queued and handed out by ``drain_events``.
"""

from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import Any, Dict, List, Optional, Tuple

from creatures.brain.sensors import SensorReading, sense_motion, sense_target
from creatures.config.simulation_config import SimulationConfig
from creatures.contracts import FoodSource, PeerIndex, PhysicsIntegrator
from creatures.creature import Creature
from creatures.energy.metabolism import (
    MetabolismTick,
    charge_movement,
    feed,
    movement_cost,
    spend_energy,
    tick_metabolism,
)
from creatures.events.domain_events import CreatureBorn, LifecycleEvent
from creatures.evolution.reproduction import Genotype, reproduce
from creatures.exceptions import UnknownCreatureError
from creatures.genetics.body_genome import random_body_genome
from creatures.genetics.innovation import InnovationRegistry
from creatures.genetics.neural_genome import random_brain
from creatures.locomotion.kinematics import tick_locomotion
from creatures.math_utils import Vector2
from creatures.world import FoodPellets, PointMassIntegrator

logger = logging.getLogger(__name__)


class Simulation:
    """Single-threaded simulation of one evolving population.

    Not thread-safe. Callers sharing a simulation across threads (the web
    backend) must serialise every call.

    Attributes:
        config: Validated configuration
        rng: The only random source used by the simulation
        registry: Innovation registry shared by every genome in this run
        food_source: Food collaborator (None disables feeding)
        integrator: Physics collaborator
        peer_index: Finds ready mates near a position (the simulation itself by default)
        time: Elapsed simulated seconds
        frame: Number of completed steps
    """

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        rng: Optional[random.Random] = None,
        food_source: Optional[FoodSource] = None,
        integrator: Optional[PhysicsIntegrator] = None,
        peer_index: Optional[PeerIndex] = None,
    ) -> None:
        self.config = config or SimulationConfig()
        self.config.validate()
        self.rng = rng or random.Random(self.config.seed)
        self.registry = InnovationRegistry()
        self.food_source = food_source
        self.integrator: PhysicsIntegrator = integrator or PointMassIntegrator()
        self.peer_index: PeerIndex = peer_index if peer_index is not None else self

        self.creatures: Dict[int, Creature] = {}
        self.time = 0.0
        self.frame = 0
        self.total_births = 0
        self.total_deaths = 0
        self._next_id = 1
        self._events: List[LifecycleEvent] = []

    # ------------------------------------------------------------------
    # Population management
    # ------------------------------------------------------------------

    @property
    def population(self) -> int:
        return len(self.creatures)

    @property
    def living(self) -> int:
        """Creatures still alive; the dead stay in ``creatures`` until the end of the step."""
        return sum(1 for creature in self.creatures.values() if creature.alive)

    def get(self, creature_id: int) -> Creature:
        creature = self.creatures.get(creature_id)
        if creature is None:
            raise UnknownCreatureError(f"No creature with id {creature_id}")
        return creature

    def random_genotype(self) -> Genotype:
        body = random_body_genome(self.rng)
        brain = random_brain(body.segment_count, self.registry, self.rng)
        return Genotype(body, brain)

    def random_position(self) -> Vector2:
        half = self.config.world_size / 2.0
        return Vector2(self.rng.uniform(-half, half), self.rng.uniform(-half, half))

    def spawn(
        self,
        genotype: Optional[Genotype] = None,
        position: Optional[Vector2] = None,
        generation: int = 0,
    ) -> Creature:
        """Add a creature; random genotype and position when not given."""
        if genotype is None:
            genotype = self.random_genotype()
        if position is None:
            position = self.random_position()
        creature = Creature(
            self._next_id,
            genotype,
            position,
            params=self.config.metabolism,
            generation=generation,
            born_at=self.time,
            segment_length=self.config.segment_length,
            segment_width=self.config.segment_width,
        )
        self._next_id += 1
        self.creatures[creature.id] = creature
        logger.debug("Spawned %r at %s", creature, creature.position)
        return creature

    def populate(self, count: Optional[int] = None) -> List[Creature]:
        """Spawn ``count`` random creatures (default ``config.initial_population``)."""
        if count is None:
            count = self.config.initial_population
        return [self.spawn() for _ in range(count)]

    def scatter_food(self) -> FoodPellets:
        """Install a fresh ``FoodPellets`` source sized from the config."""
        food = FoodPellets.scatter(
            self.rng,
            self.config.food_pellets,
            self.config.world_size,
            self.config.food_energy,
        )
        self.food_source = food
        return food

    def reset(self, seed: Optional[int] = None) -> None:
        """Restart the run: empty population, fresh registry, reseeded RNG."""
        if seed is not None:
            self.config.seed = seed
        self.rng.seed(self.config.seed)
        self.registry.reset()
        self.creatures.clear()
        self._events.clear()
        self.time = 0.0
        self.frame = 0
        self.total_births = 0
        self.total_deaths = 0
        self._next_id = 1
        logger.info("Simulation reset (seed=%s)", self.config.seed)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def _record(self, creature: Creature, tick: MetabolismTick) -> None:
        creature.metabolism = tick.state
        for event in tick.events:
            self._events.append(replace(event, creature_id=creature.id, frame=self.frame))

    def drain_events(self) -> List[LifecycleEvent]:
        """Return and clear all events queued since the previous drain."""
        events, self._events = self._events, []
        return events

    @property
    def pending_events(self) -> int:
        return len(self._events)

    # ------------------------------------------------------------------
    # Sensing
    # ------------------------------------------------------------------

    def ready_peers_near(self, position: Vector2, radius: float) -> List[Creature]:
        return [
            creature
            for creature in self.creatures.values()
            if creature.reproduction_ready and creature.position.distance_to(position) <= radius
        ]

    def _nearest_creature(self, creature: Creature, ready: bool) -> Optional[Vector2]:
        best: Optional[Vector2] = None
        best_distance = float("inf")
        for other in self.creatures.values():
            if other is creature or not other.alive or other.reproduction_ready != ready:
                continue
            distance = other.position.distance_to(creature.position)
            if distance < best_distance:
                best = other.position
                best_distance = distance
        return best

    def sense(self, creature: Creature) -> SensorReading:
        radius = self.config.sensors.sensor_radius
        food = None
        if self.food_source is not None:
            food = self.food_source.nearest(creature.position, radius)
        facing = creature.orientation
        motion = sense_motion(creature.velocity, facing, self.config.sensors)
        return SensorReading(
            food=sense_target(creature.position, facing, food, radius),
            others=sense_target(
                creature.position,
                facing,
                self._nearest_creature(creature, ready=False),
                radius,
            ),
            mate=sense_target(
                creature.position,
                facing,
                self._nearest_creature(creature, ready=True),
                radius,
            ),
            speed=motion["speed"],
            heading=motion["heading"],
        )

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------

    def step(self, dt: Optional[float] = None) -> None:
        """Advance the whole population by ``dt`` seconds (default ``config.dt``)."""
        if dt is None:
            dt = self.config.dt

        for creature in list(self.creatures.values()):
            if creature.alive:
                self._step_creature(creature, dt)

        self._mate_ready_creatures()
        self._remove_dead()

        self.time += dt
        self.frame += 1

    def _step_creature(self, creature: Creature, dt: float) -> None:
        params = self.config.metabolism

        self._record(
            creature,
            tick_metabolism(creature.metabolism, creature.segment_count, (), dt, params),
        )
        if not creature.alive:
            return

        controls = creature.think(self.sense(creature))
        result = tick_locomotion(
            creature.body,
            controls,
            self.time,
            creature.velocity,
            apply_forces=not creature.in_warmup(self.config.warmup_ticks),
        )
        creature.last_locomotion = result
        creature.ticks_alive += 1

        velocity = self.integrator.integrate(creature, result.thrust, result.drag, dt)
        creature.move(velocity, dt)

        creature.movement_energy_spent += movement_cost(result.angular_velocities, dt, params)
        self._record(
            creature, charge_movement(creature.metabolism, result.angular_velocities, dt, params)
        )

        self._try_feed(creature)

    def _try_feed(self, creature: Creature) -> None:
        if self.food_source is None:
            return
        state = creature.metabolism
        if state.current_energy >= state.max_energy - self.config.food_energy:
            return
        energy = self.food_source.consume_near(creature.position, self.config.food_detection_radius)
        if energy is None:
            return
        creature.food_eaten += 1
        self._record(creature, feed(state, energy, self.config.metabolism))

    def _remove_dead(self) -> None:
        dead = [creature_id for creature_id, c in self.creatures.items() if not c.alive]
        for creature_id in dead:
            del self.creatures[creature_id]
        self.total_deaths += len(dead)

    # ------------------------------------------------------------------
    # Reproduction
    # ------------------------------------------------------------------

    def _mate_ready_creatures(self) -> None:
        mating_range = self.config.reproduction.mating_range
        for creature in list(self.creatures.values()):
            if not creature.reproduction_ready:
                continue
            for peer in self.peer_index.ready_peers_near(creature.position, mating_range):
                if peer is creature or peer.id not in self.creatures:
                    continue
                if self.try_reproduce(creature, peer) is not None:
                    break

    def try_reproduce(self, a: Creature, b: Creature) -> Optional[Tuple[Creature, Creature]]:
        """Mate two creatures if every rule allows it.

        Both must be alive, ready and off cooldown, must not have mated with
        each other last time, and the population must have room for two
        offspring. Each parent pays the reproduction energy cost.

        Returns:
            The two offspring, or None when mating was refused
        """
        rules = self.config.reproduction
        if a is b or not (a.reproduction_ready and b.reproduction_ready):
            return None
        cooldown = rules.mating_cooldown
        if not (a.can_mate_at(self.time, cooldown) and b.can_mate_at(self.time, cooldown)):
            return None
        if a.last_partner_id == b.id or b.last_partner_id == a.id:
            return None
        living = self.living
        if living + 2 > rules.max_population:
            logger.warning(
                "Reproduction of %d and %d refused: population %d at limit %d",
                a.id,
                b.id,
                living,
                rules.max_population,
            )
            return None

        offspring_genotypes = reproduce(
            a.genotype,
            b.genotype,
            self.registry,
            self.rng,
            self.config.body_mutation,
            self.config.neural_mutation,
        )

        for parent, partner in ((a, b), (b, a)):
            self._record(
                parent,
                spend_energy(parent.metabolism, rules.energy_cost, self.config.metabolism),
            )
            parent.last_mating_time = self.time
            parent.last_partner_id = partner.id
            parent.offspring_count += 2

        midpoint = (a.position + b.position) * 0.5
        base_angle = self.rng.uniform(0.0, 360.0)
        generation = max(a.generation, b.generation) + 1
        children = []
        for index, genotype in enumerate(offspring_genotypes):
            angle = base_angle + index * 180.0 + self.rng.uniform(
                -rules.spawn_jitter_degrees, rules.spawn_jitter_degrees
            )
            position = midpoint + Vector2.from_angle(angle, rules.spawn_distance)
            child = self.spawn(genotype, position, generation=generation)
            children.append(child)
            self.total_births += 1
            self._events.append(
                CreatureBorn(
                    parent_ids=(a.id, b.id),
                    segment_count=child.segment_count,
                    creature_id=child.id,
                    frame=self.frame,
                )
            )

        logger.info(
            "Creatures %d and %d produced %d and %d (generation %d)",
            a.id,
            b.id,
            children[0].id,
            children[1].id,
            generation,
        )
        return children[0], children[1]

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def stats(self) -> Dict[str, Any]:
        living = list(self.creatures.values())
        count = len(living)
        return {
            "frame": self.frame,
            "time": self.time,
            "population": count,
            "total_births": self.total_births,
            "total_deaths": self.total_deaths,
            "mean_energy": sum(c.energy for c in living) / count if count else 0.0,
            "mean_segments": sum(c.segment_count for c in living) / count if count else 0.0,
            "max_generation": max((c.generation for c in living), default=0),
            "ready": sum(1 for c in living if c.reproduction_ready),
            "innovations": self.registry.stats(),
        }
