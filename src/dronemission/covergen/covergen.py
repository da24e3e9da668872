import configparser
import logging
import os.path
import sys
from pathlib import Path

from pyfiglet import Figlet
from rich.prompt import Confirm, Prompt

from dronemission.covergen import config
from dronemission.covergen import constants
from dronemission.covergen import mission_files
from dronemission.covergen.coverage import compute_coverage
from dronemission.covergen.readers import kml_reader


CONSOLE_FORMAT = "%(message)s"
LOGFILE_FORMAT = "%(asctime)s|%(levelname)s|%(name)s|%(message)s"
LOGGER_NAME = "dronemission.covergen"

def init_logging(logfile="covergen.log"):
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console_handler)

    logfile_handler = logging.FileHandler(logfile, "w")
    logfile_handler.setLevel(logging.DEBUG)
    logfile_handler.setFormatter(logging.Formatter(LOGFILE_FORMAT))
    logger.addHandler(logfile_handler)

def banner():
    """
    Displays the name of this utility using incredible ASCII-art.
    """
    f = Figlet(font='slant')
    return f.renderText('covergen')

def init_config(configuration_file):
    """
    Prompts the user for configuration values and then creates a valid configuration file.
    """
    print("""This utility will create a coverage configuration file by prompting """
          """you for values for each of the configuration parameters.""")
    print()
    if not configuration_file:
        configuration_file = Prompt.ask("configuration file name", default="example.ini")
    else:
        print(f'Creating configuration file {configuration_file}')
        print()

    if (os.path.exists(configuration_file)):
        print(f'WARNING: The {configuration_file} already exists.')
        overwrite = Confirm.ask("Overwrite?")
        if not overwrite:
            print('Not overwriting existing file. Exiting.')
            exit(1)

    cfg_parser = configparser.ConfigParser()

    print()
    print(f'{constants.LATTICE_SECTION_NAME} Parameters')
    print('--------------------------------------------------')
    cfg_parser.add_section(constants.LATTICE_SECTION_NAME)
    cfg_parser.set(constants.LATTICE_SECTION_NAME, "pitch", Prompt.ask("Lattice pitch (meters)", default=str(constants.DEFAULT_PITCH)))
    cfg_parser.set(constants.LATTICE_SECTION_NAME, "threshold", Prompt.ask("Minimum coverage ratio for boundary points", default=str(constants.DEFAULT_THRESHOLD)))
    cfg_parser.set(constants.LATTICE_SECTION_NAME, "max_candidates", Prompt.ask("Maximum lattice candidates", default=str(constants.DEFAULT_MAX_CANDIDATES)))
    print()

    print()
    print(f'{constants.WAYPOINTS_SECTION_NAME} Parameters')
    print('--------------------------------------------------')
    cfg_parser.add_section(constants.WAYPOINTS_SECTION_NAME)
    cfg_parser.set(constants.WAYPOINTS_SECTION_NAME, "altitude", Prompt.ask("Flight altitude (meters)", default=str(constants.DEFAULT_ALTITUDE)))
    cfg_parser.set(constants.WAYPOINTS_SECTION_NAME, "translation_x", Prompt.ask("Local frame x offset (meters)", default=str(constants.DEFAULT_TRANSLATION_X)))
    cfg_parser.set(constants.WAYPOINTS_SECTION_NAME, "translation_y", Prompt.ask("Local frame y offset (meters)", default=str(constants.DEFAULT_TRANSLATION_Y)))
    print()

    print()
    print(f'{constants.OUTPUT_SECTION_NAME} Parameters')
    print('--------------------------------------------------')
    cfg_parser.add_section(constants.OUTPUT_SECTION_NAME)
    cfg_parser.set(constants.OUTPUT_SECTION_NAME, "output_type", Prompt.ask("Mission file type", choices=list(constants.OUTPUT_TYPES), default=constants.DEFAULT_OUTPUT_TYPE))
    cfg_parser.set(constants.OUTPUT_SECTION_NAME, "output_dir", Prompt.ask("Output directory", default=constants.DEFAULT_OUTPUT_DIR))

    print()
    print(f'Saving new configuration: {configuration_file}')
    with open(configuration_file, "tw") as file:
        cfg_parser.write(file)

    return configuration_file

def plan(configuration: config.Config, kml_path) -> Path:
    """
    Reads the polygon in a KML file, computes its coverage and writes the
    mission file. Returns the path of the written file.
    """
    logger = logging.getLogger(LOGGER_NAME)

    valid, errors = config.validate(configuration)
    if not valid:
        raise ValueError(' '.join(errors))

    logger.info(f'Reading polygon from {kml_path}')
    ring = kml_reader.read_polygon(kml_path)

    result = compute_coverage(
        ring,
        configuration.wants_cartesian,
        pitch=configuration.pitch,
        threshold=configuration.threshold,
        cartesian_translation=configuration.translation,
        altitude=configuration.altitude,
        max_candidates=configuration.max_candidates,
        cartesian_precision=configuration.cartesian_precision,
    )
    summarize_result(result)

    return mission_files.write_mission(result, configuration, Path(kml_path).stem)

def summarize_result(result) -> None:
    logger = logging.getLogger(LOGGER_NAME)
    logger.info("Coverage Summary")
    logger.info("================")
    logger.info(f"Waypoints: {len(result.absolute)}")
    logger.info(f"Cartesian: {len(result.cartesian)}")
    logger.info(f"Fallback to vertices: {result.fallback}")
    logger.info(f"Truncated: {result.truncated}")
