"""
Agent Module

This module implements the Agent class, which binds a genotype to the neural
network decoded from it and tracks whether the agent is still taking part in
the evaluation of its generation.

Classes:
    Agent: A genotype together with its decoded network and an alive/dead life cycle
"""

from typing import Callable, Optional, Sequence

from evonet.exceptions              import ConfigurationError
from evonet.genotype                import Genotype
from evonet.phenotype.neural_layer  import ActivationFunction
from evonet.phenotype.neural_network import NeuralNetwork

DeathListener = Callable[['Agent'], None]

class Agent:
    """
    An agent controlled by the neural network decoded from its genotype.

    The evaluation environment wraps each genotype of a population in an Agent,
    resets it, lets its network act on the task, and kills it once the agent is
    done (crashed, timed out, finished...). The agents therefore report their
    individual completion through their death notification; once every agent of
    a generation has died the environment tells the genetic algorithm that the
    evaluation is finished.

    Life cycle:
        An agent starts out dead. 'reset()' brings it to life, 'kill()' ends it.
        Each alive -> dead transition notifies the registered death listeners
        exactly once; killing an agent that is already dead does nothing.

    Agents are ordered like their genotypes (best fitness first).

    Public Properties:
        genotype: The genotype this agent was created from
        network:  The neural network decoded from the genotype
        is_alive: Whether the agent is currently alive

    Public Methods:
        reset():                          Zero the genotype's scores and bring the agent to life
        kill():                           Kill the agent
        add_death_listener(listener):     Register a callback invoked with the agent when it dies
        remove_death_listener(listener):  Unregister a death callback
    """

    def __init__(self, genotype: Genotype, default_activation: Optional[ActivationFunction],
                 topology: Sequence[int]):
        """
        Build the agent's network and decode the genotype's parameters into it.

        Parameters:
            genotype:           the genotype whose parameters become the network weights
            default_activation: activation function given to every layer of the network
            topology:           layer sizes of the network, input layer first

        Raises:
            ConfigurationError: if the genotype's parameter count differs from the network's weight count
        """
        self._genotype: Genotype      = genotype
        self._network : NeuralNetwork = NeuralNetwork(topology, default_activation)
        self._is_alive: bool          = False
        self._death_listeners: list[DeathListener] = []

        if self._network.weight_count != genotype.parameter_count:
            raise ConfigurationError(
                f"The genotype's parameter count ({genotype.parameter_count}) must match the "
                f"weight count ({self._network.weight_count}) of topology {list(topology)}.")

        self._network.set_weights(genotype.copy_of_parameters())

    @property
    def genotype(self) -> Genotype:
        return self._genotype

    @property
    def network(self) -> NeuralNetwork:
        return self._network

    @property
    def is_alive(self) -> bool:
        return self._is_alive

    def add_death_listener(self, listener: DeathListener):
        self._death_listeners.append(listener)

    def remove_death_listener(self, listener: DeathListener):
        self._death_listeners.remove(listener)

    def reset(self):
        """Zero the evaluation and fitness of the genotype and bring the agent to life."""
        self._genotype.evaluation = 0.0
        self._genotype.fitness    = 0.0
        self._is_alive = True

    def kill(self):
        """Kill the agent; listeners are only notified if it was alive."""
        if not self._is_alive:
            return

        self._is_alive = False
        for listener in list(self._death_listeners):
            listener(self)

    def __lt__(self, other: 'Agent') -> bool:
        return self._genotype < other._genotype

    def __repr__(self):
        return f"Agent(topology={self._network.topology}, alive={self._is_alive})"
