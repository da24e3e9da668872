import click

from dronemission.covergen import config
from dronemission.covergen import constants
from dronemission.covergen import covergen
from dronemission.covergen.models import InvalidGeometry, InvalidPolygon
from dronemission.covergen.readers.kml_reader import KmlError


@click.group(epilog="For detailed help on each command, run: covergen COMMAND --help")
def cli():
    """The covergen utility turns a surveyed KML polygon into a coverage
    mission: a set of waypoints sweeping the whole area, written either as a
    flight script or as a QGroundControl plan."""
    pass

@cli.command()
@click.option('-c', '--config', help='Path to configuration file to create or replace')
def init(config):
    """Populates a configuration file based on user input."""
    click.echo(covergen.banner())
    config = covergen.init_config(config)
    click.echo(f'Initialized the covergen configuration file {config}')

@cli.command()
@click.option('-c', '--config', 'config_filename', help='Path to configuration file to display', required=True)
def info(config_filename):
    """Summarizes the contents of a configuration file."""
    click.echo(covergen.banner())
    configuration = config.configuration(config.config_parser_factory(config_filename), {})
    for k, v in configuration.__dict__.items():
        click.echo(f'  + {k}: {v}')

@cli.command()
@click.argument('kml_file', type=click.Path(exists=True, dir_okay=False))
@click.option('-c', '--config', 'config_filename', help='Path to configuration file', required=True)
@click.option('-t', '--output-type', type=click.Choice(constants.OUTPUT_TYPES), help='Mission file type.')
@click.option('-o', '--output-dir', help='Directory the mission file is written to.')
@click.option('--pitch', type=float, help='Lattice pitch in meters.')
@click.option('--threshold', type=float, help='Minimum coverage ratio for boundary points.')
def plan(kml_file, config_filename, output_type, output_dir, pitch, threshold):
    """Computes the coverage waypoints for the polygon in KML_FILE."""
    click.echo(covergen.banner())
    overrides = {
        'output_type': output_type,
        'output_dir': output_dir,
        'pitch': pitch,
        'threshold': threshold,
    }
    configuration = config.configuration(config.config_parser_factory(config_filename), overrides)
    covergen.init_logging()
    configuration.show()
    try:
        mission_path = covergen.plan(configuration, kml_file)
    except (KmlError, InvalidPolygon) as e:
        click.echo(f"\nInvalid KML file: {e}. Please check the file.")
        exit(1)
    except InvalidGeometry as e:
        click.echo(f"\nNo coverage area could be computed: {e}")
        exit(1)
    except ValueError as e:
        click.echo(f"\nUnable to plan mission: {e}")
        exit(1)
    click.echo(f'Wrote mission file {mission_path}')

if __name__ == "__main__":
    cli()
