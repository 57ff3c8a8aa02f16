from rich.console import Console

"""
Shared console output for the command line tools
"""

console = Console()
error_console = Console(stderr=True)

# Help screens stay readable on wide terminals
help_console = Console(width=min(80, console.width))

def print_error(message: str):
	error_console.print(f"[red]Error:[/red] {message}")

def print_warning(message: str):
	error_console.print(f"[yellow]Warning:[/yellow] {message}")

if __name__ == '__main__':
	print('__main__ not supported in modules.')
