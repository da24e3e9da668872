import configparser
import dataclasses
import logging
import os.path

from dronemission.covergen import constants


@dataclasses.dataclass
class Config:
    pitch: float
    threshold: float
    max_candidates: int
    altitude: float
    translation_x: float
    translation_y: float
    cartesian_precision: int
    output_type: str
    output_dir: str

    def show(self):
        logger = logging.getLogger("dronemission.covergen")
        logger.info('')
        logger.info('Using configuration:')
        for k, v in self.__dict__.items():
            logger.info(f'  + {k}: {v}')

    @property
    def translation(self):
        return (self.translation_x, self.translation_y)

    @property
    def wants_cartesian(self):
        # Only the flight script embeds local-frame waypoints
        return self.output_type == 'python'


def config_parser_factory(configuration_file):
    """
    Returns a ConfigParser by reading the specified file.
    """
    if configuration_file is None or not os.path.exists(configuration_file):
        raise ValueError(f'Unable to find configuration file {configuration_file}')
    cfg_parser = configparser.ConfigParser(interpolation=configparser.ExtendedInterpolation())
    cfg_parser.read(configuration_file)
    return cfg_parser


def _get_configuration_value(section, name, value_type, config_parser, overrides):
    """
    Returns a value from the provided config parser; any value for the key that
    is provided in the 'overrides' dictionary will take precedence.
    """
    if overrides.get(name) is None:
        if value_type is bool:
            return config_parser.getboolean(section, name)
        elif value_type is int:
            return config_parser.getint(section, name)
        elif value_type is float:
            return config_parser.getfloat(section, name)
        else:
            return config_parser.get(section, name)
    else:
        return value_type(overrides.get(name))


def configuration(config_parser, overrides):
    """
    Returns a valid Config object that is populated from the provided config
    parser, with values overridden with anything provided in 'overrides'.
    """
    config_parser['DEFAULT'] = {
        'pitch': constants.DEFAULT_PITCH,
        'threshold': constants.DEFAULT_THRESHOLD,
        'max_candidates': constants.DEFAULT_MAX_CANDIDATES,
        'altitude': constants.DEFAULT_ALTITUDE,
        'translation_x': constants.DEFAULT_TRANSLATION_X,
        'translation_y': constants.DEFAULT_TRANSLATION_Y,
        'cartesian_precision': constants.DEFAULT_CARTESIAN_PRECISION,
        'output_type': constants.DEFAULT_OUTPUT_TYPE,
        'output_dir': constants.DEFAULT_OUTPUT_DIR,
    }
    for section in (constants.LATTICE_SECTION_NAME,
                    constants.WAYPOINTS_SECTION_NAME,
                    constants.OUTPUT_SECTION_NAME):
        if not config_parser.has_section(section):
            config_parser.add_section(section)

    try:
        return Config(
            _get_configuration_value(constants.LATTICE_SECTION_NAME, 'pitch', float, config_parser, overrides),
            _get_configuration_value(constants.LATTICE_SECTION_NAME, 'threshold', float, config_parser, overrides),
            _get_configuration_value(constants.LATTICE_SECTION_NAME, 'max_candidates', int, config_parser, overrides),
            _get_configuration_value(constants.WAYPOINTS_SECTION_NAME, 'altitude', float, config_parser, overrides),
            _get_configuration_value(constants.WAYPOINTS_SECTION_NAME, 'translation_x', float, config_parser, overrides),
            _get_configuration_value(constants.WAYPOINTS_SECTION_NAME, 'translation_y', float, config_parser, overrides),
            _get_configuration_value(constants.WAYPOINTS_SECTION_NAME, 'cartesian_precision', int, config_parser, overrides),
            _get_configuration_value(constants.OUTPUT_SECTION_NAME, 'output_type', str, config_parser, overrides),
            _get_configuration_value(constants.OUTPUT_SECTION_NAME, 'output_dir', str, config_parser, overrides),
        )
    except ValueError as e:
        raise ValueError(f'Unable to read the configuration file: {e}')


def validate(configuration):
    """
    Validates each value in the configuration.
    """
    validations = [
        ['pitch', lambda pitch: pitch > 0, 'The pitch must be positive.'],
        ['threshold', lambda threshold: 0 <= threshold <= 1, 'The threshold must be between 0 and 1.'],
        ['max_candidates', lambda count: count > 0, 'The max_candidates must be positive.'],
        ['cartesian_precision', lambda digits: digits >= 0, 'The cartesian_precision must not be negative.'],
        ['output_type', lambda kind: kind in constants.OUTPUT_TYPES, f'The output_type must be one of {", ".join(constants.OUTPUT_TYPES)}.'],
    ]
    errors = [msg for name, fn, msg in validations if not fn(getattr(configuration, name))]
    return len(errors) == 0, errors
