import argparse
from pathlib import Path
from typing import Dict

from rich.panel import Panel
from rich.table import Table

from sensornoise.config import NoiseConfig
from sensornoise.presets import DEFAULT_PRESET, PRESETS, NoisePreset, create_config, load_presets

"""
Noise options shared by the command line tools
"""

def add_noise_arguments(parser: argparse.ArgumentParser):
	parser.add_argument('--preset', '-p', type=str, default=DEFAULT_PRESET, help=f'Preset name (default: {DEFAULT_PRESET})')
	parser.add_argument('--presets-file', type=str, default=None, help='JSON file with additional presets')
	parser.add_argument('--preset-list', action='store_true', help='List available presets and exit')
	parser.add_argument('--intensity', '-i', type=float, default=None, help='Noise intensity 0.0-1.0')
	parser.add_argument('--variance', '-v', type=float, default=None, help='Spatial noise variance 0.0-1.0')
	parser.add_argument('--micro-contrast', '-m', type=float, default=None, help='Micro-contrast strength 0.0-1.0')
	parser.add_argument('--seed', '-s', type=int, default=None, help='Random seed for reproducible output')
	parser.add_argument('--no-luminance', action='store_true', help='Disable luminance-dependent noise')

def available_presets(args: argparse.Namespace) -> Dict[str, NoisePreset]:
	"""Built-in presets, extended or overridden by --presets-file"""
	presets = dict(PRESETS)
	if args.presets_file:
		presets.update(load_presets(Path(args.presets_file)))
	return presets

def build_config(args: argparse.Namespace, presets: Dict[str, NoisePreset]) -> NoiseConfig:
	"""Preset settings with command line overrides applied; raises on invalid values"""
	if args.preset not in presets:
		raise KeyError(f"Unknown preset: {args.preset}. Available presets: {', '.join(presets)}")

	return create_config(
		presets[args.preset].settings,
		intensity=args.intensity,
		variance=args.variance,
		micro_contrast=args.micro_contrast,
		seed=args.seed,
		luminance_dependent=False if args.no_luminance else None
	)

def render_preset_list(console, presets: Dict[str, NoisePreset]):
	table = Table(show_header=True, header_style="bold cyan", border_style="dim")
	table.add_column("Preset", style="cyan")
	table.add_column("Intensity", justify="right")
	table.add_column("Variance", justify="right")
	table.add_column("Micro-contrast", justify="right")
	table.add_column("Luminance", justify="center")
	table.add_column("Description")

	for key, preset in presets.items():
		settings = preset.settings
		label = key if key != DEFAULT_PRESET else f"{key} [dim](default)[/dim]"
		table.add_row(
			label,
			f"{settings.intensity:.4f}",
			f"{settings.variance:.4f}",
			f"{settings.micro_contrast:.4f}",
			"yes" if settings.luminance_dependent else "no",
			f"[bold]{preset.name}[/bold]\n{preset.description}"
		)

	console.print()
	console.print(Panel(table, title="[bold]Available Presets[/bold]", border_style="magenta"))
	console.print()

def config_table(config: NoiseConfig, preset_name: str) -> Table:
	table = Table.grid(padding=(0, 2))
	table.add_column(style="cyan", justify="right")
	table.add_column(style="white")

	table.add_row("Preset:", preset_name)
	table.add_row("Intensity:", f"{config.intensity:.4f}")
	table.add_row("Variance:", f"{config.variance:.2f}")
	table.add_row("Micro-contrast:", f"{config.micro_contrast:.2f}")
	table.add_row("Luminance:", "[green]dependent[/green]" if config.luminance_dependent else "[yellow]uniform[/yellow]")
	table.add_row("Seed:", str(config.seed) if config.seed is not None else "[dim]random[/dim]")
	return table
