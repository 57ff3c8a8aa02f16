import argparse
import sys
import time

from rich.markup import escape
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn, TimeRemainingColumn
from rich.table import Table

from sensornoise import file_tools
from sensornoise.batch import process_image_batch
from sensornoise.cli_options import add_noise_arguments, available_presets, build_config, config_table, render_preset_list
from sensornoise.tools.print_tools import console, help_console, print_error, print_warning

"""
SensorNoise Batch CLI - Batch process directories of images
"""

def render_help():
	"""Render custom help output using Rich"""
	# Header
	help_console.print()
	help_console.print(Panel.fit(
		"[bold cyan]SensorNoise Batch[/bold cyan]\n"
		"Add realistic camera sensor noise to directories of images",
		border_style="cyan"
	))
	help_console.print()

	# Quick Start
	quick_start = Table.grid(padding=(0, 2))
	quick_start.add_column(style="dim")
	quick_start.add_row("sensornoise-batch")
	quick_start.add_row("sensornoise-batch --input photos/ --output processed/")
	quick_start.add_row("sensornoise-batch --preset subtle --seed 42")

	help_console.print(Panel(quick_start, title="[bold]Quick Start[/bold]", border_style="green"))
	help_console.print()

	# Options
	options = Table.grid(padding=(0, 1))
	options.add_column(style="cyan", width=22)
	options.add_column(style="white")

	options.add_row("[bold]Files[/bold]", "")
	options.add_row("  --input", "dir  [dim](default: ./input)[/dim]")
	options.add_row("  --output", "dir  [dim](default: ./output)[/dim]")
	options.add_row("  --recursive", "Search subdirectories")
	options.add_row("  --stop-on-error", "Abort on the first failed image")
	options.add_row("", "")
	options.add_row("[bold]Noise[/bold]", "")
	options.add_row("  --preset, -p", "subtle | normal | moderate | flat  [dim](default: normal)[/dim]")
	options.add_row("  --preset-list", "Show all presets with their settings")
	options.add_row("  --presets-file", "JSON file with extra presets")
	options.add_row("  --intensity, -i", "0.0-1.0")
	options.add_row("  --variance, -v", "0.0-1.0")
	options.add_row("  --micro-contrast, -m", "0.0-1.0")
	options.add_row("  --seed, -s", "int  [dim](default: random)[/dim]")
	options.add_row("  --vary-seed", "Different seed per image, derived from --seed")
	options.add_row("  --no-luminance", "Uniform noise across brightness levels")

	help_console.print(Panel(options, title="[bold]Options[/bold]", border_style="blue"))
	help_console.print()

	# Footer
	help_console.print("[dim]For single images, see: [cyan]sensornoise --help[/cyan][/dim]")
	help_console.print()

def parse_arguments(argv=None) -> argparse.Namespace:
	parser = argparse.ArgumentParser(
		description='Add realistic camera sensor noise to a directory of images',
		add_help=False  # Disable default help to use our custom one
	)

	parser.add_argument('--input', type=str, default='./input', help='Input directory (default: ./input)')
	parser.add_argument('--output', type=str, default='./output', help='Output directory (default: ./output)')
	parser.add_argument('--recursive', action='store_true', help='Search subdirectories recursively')
	parser.add_argument('--vary-seed', action='store_true', help='Use a different seed for each image')
	parser.add_argument('--stop-on-error', action='store_true', help='Stop at the first image that fails')
	add_noise_arguments(parser)

	return parser.parse_args(argv)

def main(argv=None) -> int:
	"""Main CLI entry point for batch processing"""
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

	try:
		output_dir = file_tools.ensure_directory(args.output)
	except OSError as e:
		print_error(f"Failed to create output directory: {escape(str(e))}")
		return 1

	# Find images
	search_mode = "recursively" if args.recursive else "in current directory only"
	console.print(f"[cyan]Scanning[/cyan] [bright_yellow]{escape(args.input)}[/bright_yellow] {search_mode}...")
	try:
		images = file_tools.list_images(args.input, recursive=args.recursive)
	except OSError as e:
		print_error(f"Failed to read input directory: {escape(str(e))}")
		return 1

	if not images:
		print_warning(f"No images found in [bright_yellow]{escape(args.input)}[/bright_yellow]")
		console.print(f"Supported formats: {', '.join(sorted(file_tools.IMAGE_EXTENSIONS))}")
		return 0

	# Mirror input subdirectories so same-named files never collide
	output_paths = [file_tools.get_output_path(path, output_dir, input_dir=args.input) for path in images]
	try:
		for parent in sorted({path.parent for path in output_paths}):
			file_tools.ensure_directory(parent)
	except OSError as e:
		print_error(f"Failed to create output directory: {escape(str(e))}")
		return 1

	# Display configuration panel
	table = config_table(config, args.preset)
	table.add_row("Images:", f"{len(images)}")
	table.add_row("Output:", f"[bright_yellow]{escape(str(output_dir))}[/bright_yellow]")
	if args.vary_seed:
		table.add_row("Per-image seeds:", "[yellow]enabled[/yellow]")

	console.print()
	console.print(Panel(table, title="[bold]Sensor Noise Batch Processing[/bold]", border_style="blue"))
	console.print()

	progress_columns = [
		SpinnerColumn(),
		TextColumn("[progress.description]{task.description}"),
		BarColumn(),
		TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
		TextColumn("|"),
		TextColumn("[cyan]{task.completed}/{task.total}"),
		TextColumn("|"),
		TimeElapsedColumn(),
		TextColumn("|"),
		TimeRemainingColumn()
	]

	start_time = time.time()

	with Progress(*progress_columns, console=console) as progress:
		task = progress.add_task("[green]Processing images...", total=len(images))

		def on_progress(current, total, result):
			progress.update(task, completed=current, description=f"[green]Processed[/green] [bright_yellow]{escape(result.input_path.name)}[/bright_yellow]")

		try:
			batch = process_image_batch(
				images,
				output_paths,
				config,
				on_progress=on_progress,
				vary_seed=args.vary_seed,
				stop_on_error=args.stop_on_error
			)
		except Exception as e:
			print_error(f"Processing failed: {escape(str(e))}")
			return 1

	# Display summary
	elapsed = time.time() - start_time
	success_count = len(batch.results)
	fail_count = len(batch.failed)

	summary = Table(show_header=True, header_style="bold cyan", border_style="blue")
	summary.add_column("Metric", style="cyan", justify="right")
	summary.add_column("Value", style="white")

	summary.add_row("Total images", str(len(images)))
	summary.add_row("Successful", f"[green]{success_count}[/green]")
	if fail_count > 0:
		summary.add_row("Failed", f"[red]{fail_count}[/red]")
	summary.add_row("Total time", file_tools.format_time(elapsed * 1000.0))
	summary.add_row("Average time", f"{file_tools.format_time(elapsed * 1000.0 / len(images))} per image")
	if batch.results:
		input_size = sum(result.input_path.stat().st_size for result in batch.results)
		output_size = sum(result.output_path.stat().st_size for result in batch.results)
		summary.add_row("Input size", file_tools.format_file_size(input_size))
		summary.add_row("Output size", file_tools.format_file_size(output_size))

	console.print()
	console.print(Panel(summary, title="[bold]Batch Processing Summary[/bold]", border_style="green" if fail_count == 0 else "yellow"))

	# Report failed images if any
	if batch.failed:
		console.print()
		error_table = Table(show_header=True, header_style="bold red", border_style="red")
		error_table.add_column("File", style="bright_yellow")
		error_table.add_column("Error", style="white")

		for path, error in batch.failed:
			error_table.add_row(escape(path.name), escape(error))

		console.print(Panel(error_table, title="[bold red]Failed Images[/bold red]", border_style="red"))

	console.print()

	return 0 if fail_count == 0 else 1

if __name__ == '__main__':
	sys.exit(main())
