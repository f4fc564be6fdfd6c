import configparser
import os
from copperhorn.activations import activations

class Config:

    @staticmethod
    def _parse_activation(name):
        """
        Validate an activation function name against the registry.

        Returns:
            The name, unchanged
        """
        if name not in activations:
            raise ValueError(f"Invalid activation function '{name}'")
        return name

    def __init__(self, config_file: str | None = None):
        """
        Initialize Config by parsing an INI file, or create a default Config.

        Parameters:
            config_file: Path to the INI configuration file.
                         If None, creates a Config with default values for manual attribute setting.
        """

        # Default config for testing/manual setup
        if config_file is None:
            self.activation = "identity"

            self.num_inputs      = None
            self.num_outputs     = None
            self.weight_init_min = 0.0
            self.weight_init_max = 1.0
            self.bias_init_min   = 0.0
            self.bias_init_max   = 1.0
            self.seed            = None

            self.learning_rate = 0.01

            self.num_jobs = 1

            return

        if not os.path.exists(config_file):
            raise FileNotFoundError(f"Configuration file '{config_file}' not found")

        parser = configparser.ConfigParser()
        parser.read(config_file)

        # Sentinel for missing default values
        _NO_DEFAULT = object()

        # Helper function to safely parse values
        def get_value(section, key, value_type, default=_NO_DEFAULT):
            try:
                raw_value = parser.get(section, key)
                if raw_value.lower() == 'none':
                    return None
                if value_type == int:
                    return parser.getint(section, key)
                elif value_type == float:
                    return parser.getfloat(section, key)
                elif value_type == bool:
                    return parser.getboolean(section, key)
                elif value_type == str:
                    return raw_value
            except (configparser.NoSectionError, configparser.NoOptionError):
                if default is not _NO_DEFAULT:
                    return default
                raise

        # [ORGANISM]

        # Default activation function for the neurons of an organism.
        # Options: see 'basic_activations.py' ("identity" is a linear passthrough,
        #          "tanh" and "sigmoid" are bounded squashing functions).
        self.activation = get_value('ORGANISM', 'activation', str, default='identity')

        # [ASSEMBLY]

        # The width of the input vector the generated organisms read from.
        self.num_inputs = get_value('ASSEMBLY', 'num_inputs', int)

        # The width of the output vector, one output neuron per slot.
        self.num_outputs = get_value('ASSEMBLY', 'num_outputs', int)

        # The bounds of the uniform distributions used to draw
        # the weights and the biases of generated output neurons.
        self.weight_init_min = get_value('ASSEMBLY', 'weight_init_min', float, default=0.0)
        self.weight_init_max = get_value('ASSEMBLY', 'weight_init_max', float, default=1.0)
        self.bias_init_min   = get_value('ASSEMBLY', 'bias_init_min'  , float, default=0.0)
        self.bias_init_max   = get_value('ASSEMBLY', 'bias_init_max'  , float, default=1.0)

        # Seed of the random generator used for assembly.
        # Use "None" for a fresh, unseeded generator.
        self.seed = get_value('ASSEMBLY', 'seed', int, default=None)

        # [LEARNING]

        # The learning rate 'eta' used by Oja's rule.
        self.learning_rate = get_value('LEARNING', 'learning_rate', float, default=0.01)

        # [EVALUATION]

        # Number of worker threads firing the neurons of one dependency level.
        #   1 = serial (no parallelization)
        #  -1 = use all available CPU cores
        self.num_jobs = get_value('EVALUATION', 'num_jobs', int, default=1)

    def __setattr__(self, name, value):
        """
        Override 'setattr' to validate the activation name whenever it is set.
        """
        if name == 'activation':
            value = self._parse_activation(value)
        super().__setattr__(name, value)
