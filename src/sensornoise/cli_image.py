import argparse
import sys
from pathlib import Path

from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from sensornoise import SensorNoiseRenderer
from sensornoise.cli_options import add_noise_arguments, available_presets, build_config, config_table, render_preset_list
from sensornoise.file_tools import format_time, is_supported_image
from sensornoise.tools.print_tools import console, help_console, print_error

"""
SensorNoise CLI - Single image sensor noise
"""

# Default suffix for auto-generated output filenames
DEFAULT_AUTONAME_SUFFIX = "-noisy"

def render_help():
	"""Render custom help output using Rich"""

	# Header
	help_console.print()
	help_console.print(Panel.fit(
		"[bold cyan]SensorNoise[/bold cyan]\n"
		"Realistic camera sensor noise for your images",
		border_style="cyan"
	))
	help_console.print()

	# Quick Start
	quick_start = Table.grid(padding=(0, 2))
	quick_start.add_column(style="dim")
	quick_start.add_row("sensornoise input.jpg")
	quick_start.add_row("sensornoise input.jpg output.jpg")
	quick_start.add_row("sensornoise input.jpg --preset moderate --seed 42")

	help_console.print(Panel(quick_start, title="[bold]Quick Start[/bold]", border_style="green"))
	help_console.print()

	# Options
	options = Table.grid(padding=(0, 1))
	options.add_column(style="cyan", width=22)
	options.add_column(style="white")

	options.add_row("--preset, -p", "subtle | normal | moderate | flat  [dim](default: normal)[/dim]")
	options.add_row("--preset-list", "Show all presets with their settings")
	options.add_row("--presets-file", "JSON file with extra presets")
	options.add_row("", "")
	options.add_row("--intensity, -i", "0.0-1.0  [dim]Noise strength (real sensors: 0.003-0.015)[/dim]")
	options.add_row("--variance, -v", "0.0-1.0  [dim]Pixel-to-pixel strength variation[/dim]")
	options.add_row("--micro-contrast, -m", "0.0-1.0  [dim]Contrast lift against plastic smoothness[/dim]")
	options.add_row("--seed, -s", "int  [dim]Reproducible noise (default: random)[/dim]")
	options.add_row("--no-luminance", "Same noise level in shadows and highlights")

	help_console.print(Panel(options, title="[bold]Options[/bold]", border_style="blue"))
	help_console.print()

	# Examples
	examples = Table.grid(padding=(0, 0))
	examples.add_column(style="white")

	examples.add_row("[dim]# Basic usage (auto-named output: photo-noisy.jpg)[/dim]")
	examples.add_row("[green]sensornoise[/green] photo.jpg")
	examples.add_row("")
	examples.add_row("[dim]# Stronger noise, reproducible[/dim]")
	examples.add_row("[green]sensornoise[/green] photo.jpg --preset moderate --seed 12345")
	examples.add_row("")
	examples.add_row("[dim]# Custom settings without contrast lift[/dim]")
	examples.add_row("[green]sensornoise[/green] photo.jpg --intensity 0.012 --variance 0.3 -m 0")

	help_console.print(Panel(examples, title="[bold]Examples[/bold]", border_style="green"))
	help_console.print()

	# Footer
	help_console.print("[dim]For directories, see: [cyan]sensornoise-batch --help[/cyan][/dim]")
	help_console.print()

def parse_arguments(argv=None) -> argparse.Namespace:
	parser = argparse.ArgumentParser(
		description='Add realistic camera sensor noise to an image',
		add_help=False  # Disable default help to use our custom one
	)

	parser.add_argument('input', type=str, nargs='?', default=None, help='Input image file')
	parser.add_argument('output', type=str, nargs='?', default=None, help='Output image file (optional, defaults to {input}-noisy{ext})')
	parser.add_argument('--yes', '-y', action='store_true', help='Overwrite an existing output without asking')
	add_noise_arguments(parser)

	return parser.parse_args(argv)

def main(argv=None) -> int:
	"""Main CLI entry point for single image processing"""
	args_list = sys.argv[1:] if argv is None else argv
	# Check for help flag before parsing
	if '--help' in args_list or '-h' in args_list:
		render_help()
		return 0

	args = parse_arguments(args_list)

	try:
		presets = available_presets(args)
	except (OSError, ValueError) as e:
		print_error(f"Failed to load presets: {escape(str(e))}")
		return 1

	if args.preset_list:
		render_preset_list(console, presets)
		return 0

	try:
		config = build_config(args, presets)
	except (KeyError, ValueError) as e:
		print_error(f"Invalid configuration: {escape(str(e))}")
		return 1

	if args.input is None:
		print_error("No input image given (see [cyan]sensornoise --help[/cyan])")
		return 1

	input_path = Path(args.input)
	if not input_path.is_file():
		print_error(f"Input file [bright_yellow]{escape(str(input_path))}[/bright_yellow] not found")
		return 1
	if not is_supported_image(input_path):
		print_error(f"Unsupported image format: {escape(input_path.suffix)}")
		return 1

	# Determine output path
	if args.output is None:
		output_path = input_path.parent / f"{input_path.stem}{DEFAULT_AUTONAME_SUFFIX}{input_path.suffix}"
	else:
		output_path = Path(args.output)

	# Check for overwrite
	if output_path.exists() and not args.yes:
		response = console.input(f"[yellow]Output file [bright_yellow]{escape(str(output_path))}[/bright_yellow] exists. Overwrite? [y/N][/yellow] ")
		if response.lower() != 'y':
			console.print("[yellow]Cancelled.[/yellow]")
			return 0

	table = config_table(config, args.preset)
	table.add_row("Image:", f"[bright_yellow]{escape(input_path.name)}[/bright_yellow]")

	console.print()
	console.print(Panel(table, title="[bold]Sensor Noise[/bold]", border_style="blue"))
	console.print()

	renderer = SensorNoiseRenderer(config)

	try:
		with Progress(SpinnerColumn(), TextColumn("[cyan]Adding sensor noise...[/cyan]"), console=console) as progress:
			progress.add_task("render", total=None)
			result = renderer.render_from_file(input_path, output_path)
	except Exception as e:
		print_error(f"Processing failed: {escape(str(e))}")
		return 1

	console.print(f"[green]✓ Done![/green] {result.width}x{result.height} in [bold]{format_time(result.processing_time_ms)}[/bold]")
	console.print(f"  Output: [bright_yellow]{escape(str(result.output_path))}[/bright_yellow]")
	console.print()

	return 0

if __name__ == '__main__':
	sys.exit(main())
