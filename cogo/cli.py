"""cogo command line - create, list and destroy cloud servers through a wizard."""

import logging
import os
import signal
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

import typer
from pydantic import BaseModel, ConfigDict, ValidationError as SettingsValidationError

from cogo.config import ConfigError, Settings, load_settings
from cogo.credentials import (
    CredentialError,
    FileProvider,
    KeychainProvider,
    Manager,
    PromptCancelledError,
    TokenNotFoundError,
    default_manager,
    default_providers,
    mask_token,
)
from cogo.credentials.env import DEFAULT_ENV_VARS
from cogo.engine import ActionRunner, Context, RealActionRunner, Signal, StepFailedError
from cogo.engine.empty import error_message
from cogo.engine.validation import validate_required
from cogo.services.digitalocean import (
    DigitalOceanClient,
    DigitalOceanError,
    display_droplet_list,
    execute_create_flow,
    execute_destroy_flow,
)
from cogo.services.digitalocean.client import SelectItem

logger = logging.getLogger(__name__)

PROVIDERS = [SelectItem(name="DigitalOcean", value="DO")]

app = typer.Typer(
    help="Cogo is a CLI tool used to interact easily as a wizard with multiple cloud providers.",
    no_args_is_help=True,
    add_completion=False,
)
config_app = typer.Typer(help="Manage cogo configuration and credentials.", no_args_is_help=True)
app.add_typer(config_app, name="config")


class CliState(BaseModel):
    """Per-invocation objects shared by the commands."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    settings: Settings
    runner: ActionRunner
    flag_token: str = ""


def make_runner() -> ActionRunner:
    return RealActionRunner()


def make_client(token: str, settings: Settings) -> DigitalOceanClient:
    return DigitalOceanClient(token, base_url=settings.api_url, timeout=settings.timeout)


def make_manager(flag_token: str, runner: ActionRunner, prompt: bool = True) -> Manager:
    return default_manager(flag_token, runner=runner, prompt=prompt)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


@contextmanager
def interrupt_cancels(ctx: Context) -> Iterator[Context]:
    """Route Ctrl+C into ``ctx`` for the duration of a wizard."""
    if threading.current_thread() is not threading.main_thread():
        yield ctx
        return

    def handler(signum, frame):
        ctx.cancel()
        # Still interrupt a blocking read so the prompt returns
        signal.default_int_handler(signum, frame)

    previous = signal.signal(signal.SIGINT, handler)
    try:
        yield ctx
    finally:
        signal.signal(signal.SIGINT, previous)


@contextmanager
def handle_errors(runner: ActionRunner) -> Iterator[None]:
    """Turn failures into a message and exit code 1; Ctrl+C exits quietly."""
    try:
        yield
    except StepFailedError as e:
        runner.error(error_message(f"step '{e.step_name}' failed", str(e.cause)))
        raise typer.Exit(code=1)
    except DigitalOceanError as e:
        runner.error(error_message("DigitalOcean request failed", str(e)))
        raise typer.Exit(code=1)
    except CredentialError as e:
        runner.error(error_message("credential storage failed", str(e)))
        raise typer.Exit(code=1)
    except KeyboardInterrupt:
        runner.display("")
        raise typer.Exit(code=0)


def _state(ctx: typer.Context) -> CliState:
    return ctx.obj


def select_provider(runner: ActionRunner, ctx: Context) -> Optional[str]:
    """Ask which cloud to talk to; None if the user backed out."""
    choice = runner.select("Select Provider", [p.name for p in PROVIDERS], ctx=ctx)
    if isinstance(choice, Signal):
        if choice is Signal.CONTEXT_CANCELLED:
            runner.display("")
        return None
    return PROVIDERS[choice].value


def offer_to_save_token(runner: ActionRunner, token: str, ctx: Context) -> None:
    """After a prompted token, offer to store it (keychain, else file)."""
    answer = runner.confirm("Save token securely in keychain for future use?", default=False, ctx=ctx)
    if answer is not True:
        return

    keychain = KeychainProvider()
    if keychain.available():
        try:
            keychain.set_token(token)
        except CredentialError as e:
            logger.debug("Keychain write failed: %s", e)
        else:
            runner.success("✓ Token saved securely in keychain")
            return

    runner.warning("⚠  Keychain not available, using file storage")
    try:
        FileProvider(runner=runner).set_token(token)
    except CredentialError as e:
        runner.error(f"✗ Failed to save token: {e}")


def resolve_client(state: CliState, ctx: Context) -> Optional[DigitalOceanClient]:
    """Find a token and build the API client, or explain why not."""
    runner = state.runner
    try:
        token, source = make_manager(state.flag_token, runner).get_token()
    except PromptCancelledError as e:
        if e.signal is Signal.CONTEXT_CANCELLED:
            runner.display("")
        else:
            runner.display("Canceled")
        raise typer.Exit(code=0)
    except TokenNotFoundError:
        runner.error(error_message(
            "Unable to get DigitalOcean API token",
            suggestion="Run 'cogo config set-token' to configure your token.",
        ))
        return None

    logger.debug("Using token from %s (%s)", source.provider, source.location)
    if source.provider == "prompt":
        offer_to_save_token(runner, token, ctx)
    return make_client(token, state.settings)


@app.callback()
def main_callback(
    ctx: typer.Context,
    token: str = typer.Option("", "--token", help="DigitalOcean API token (overrides stored credentials)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Create, list and destroy servers with a step-by-step wizard."""
    try:
        settings = load_settings()
    except (ConfigError, SettingsValidationError) as e:
        configure_logging(verbose)
        typer.echo(f"✗ Error: invalid configuration: {e}", err=True)
        raise typer.Exit(code=1)

    configure_logging(verbose or settings.verbose)
    ctx.obj = CliState(settings=settings, runner=make_runner(), flag_token=token)


@app.command()
def create(ctx: typer.Context):
    """Walk through a wizard to create a server in the selected provider."""
    state = _state(ctx)
    runner = state.runner
    run_ctx = Context.background()

    with interrupt_cancels(run_ctx), handle_errors(runner):
        if select_provider(runner, run_ctx) is None:
            return
        client = resolve_client(state, run_ctx)
        if client is None:
            raise typer.Exit(code=1)

        droplet = execute_create_flow(client, runner, run_ctx, default_region=state.settings.default_region)

    if droplet is None:
        # Canceled or empty state; the message was already shown
        return
    runner.success(f"✓ Droplet [{droplet.name}] was created!")
    runner.display("List your droplets in a couple of minutes to see the IP", style="cyan")


@app.command("list")
def list_droplets(ctx: typer.Context):
    """Show the servers you currently have in the selected provider."""
    state = _state(ctx)
    runner = state.runner
    run_ctx = Context.background()

    with interrupt_cancels(run_ctx), handle_errors(runner):
        if select_provider(runner, run_ctx) is None:
            return
        client = resolve_client(state, run_ctx)
        if client is None:
            raise typer.Exit(code=1)
        display_droplet_list(client, runner)


@app.command()
def destroy(ctx: typer.Context):
    """Select a server and delete it, after several confirmations."""
    state = _state(ctx)
    runner = state.runner
    run_ctx = Context.background()

    with interrupt_cancels(run_ctx), handle_errors(runner):
        if select_provider(runner, run_ctx) is None:
            return
        client = resolve_client(state, run_ctx)
        if client is None:
            raise typer.Exit(code=1)

        destroyed = execute_destroy_flow(client, runner, run_ctx)

    if destroyed is None:
        return
    runner.success(f"✓ Droplet [{destroyed.name}] has been destroyed")


@config_app.command("set-token")
def set_token(
    ctx: typer.Context,
    token: Optional[str] = typer.Argument(None, help="API token (prompted for if omitted)"),
    use_file: bool = typer.Option(False, "--file", help="Store in the ~/.cogo config file (not recommended)"),
):
    """Store your DigitalOcean API token (OS keychain by default)."""
    runner = _state(ctx).runner

    if not token:
        answer = runner.get_input(
            "Enter your DigitalOcean API Token",
            validator=validate_required("token"),
            mask=True,
        )
        if isinstance(answer, Signal) or not answer:
            runner.display("Canceled")
            return
        token = answer

    provider = FileProvider(runner=runner) if use_file else KeychainProvider()
    if not use_file and not provider.available():
        runner.error("✗ OS keychain is not available on this system")
        runner.display("")
        runner.display("Use --file to store the token in ~/.cogo, or set DIGITALOCEAN_TOKEN instead.")
        raise typer.Exit(code=1)

    with handle_errors(runner):
        provider.set_token(token)

    runner.success(f"✓ Token successfully stored in {provider.name}")
    if use_file:
        runner.display("")
        runner.warning("⚠️  WARNING: Token stored in plain text file")
        runner.warning("   Consider using keychain storage for better security:")
        runner.warning("   $ cogo config set-token")


@config_app.command("get-token")
def get_token(ctx: typer.Context):
    """Display your stored API token (masked)."""
    state = _state(ctx)
    runner = state.runner

    try:
        token, source = make_manager(state.flag_token, runner, prompt=False).get_token()
    except TokenNotFoundError:
        runner.error("✗ No token found")
        runner.display("")
        runner.display("To set a token, run:")
        runner.display("  $ cogo config set-token")
        raise typer.Exit(code=1)

    runner.display(f"Token: {mask_token(token)}")
    runner.display(f"Source: {source.provider} ({source.location})")
    if not source.secure:
        runner.display("")
        runner.warning("⚠️  WARNING: Token is stored insecurely")
        runner.warning("   Consider migrating to keychain storage:")
        runner.warning("   $ cogo config migrate")


@config_app.command("delete-token")
def delete_token(ctx: typer.Context):
    """Remove your API token from every storage location."""
    state = _state(ctx)
    runner = state.runner

    answer = runner.confirm("Are you sure you want to delete your stored token?", default=False)
    if answer is not True:
        runner.display("Canceled")
        return

    with handle_errors(runner):
        deleted = make_manager("", runner, prompt=False).delete_token()

    if not deleted:
        runner.display("No stored token found")
        return
    runner.success(f"✓ Token deleted from: {', '.join(deleted)}")


@config_app.command()
def status(ctx: typer.Context):
    """Show where credentials are stored and whether they are readable."""
    state = _state(ctx)
    runner = state.runner

    runner.display("Credential Configuration Status")
    runner.display("================================")
    runner.display("")

    providers = [p for p in default_providers("", runner=runner, prompt=False) if p.name != "flag"]
    for provider in providers:
        line = "✗ Not available"
        if provider.available():
            try:
                line = f"✓ Token found ({mask_token(provider.get_token())})"
            except CredentialError:
                line = "○ Available (no token)"
        runner.display(f"{provider.name:<15}: {line}")

    runner.display("")
    runner.display("Effective Token")
    runner.display("---------------")
    try:
        token, source = make_manager(state.flag_token, runner, prompt=False).get_token()
    except TokenNotFoundError:
        runner.warning("No token configured")
        runner.display("")
        runner.display("To set a token, run:")
        runner.display("  $ cogo config set-token")
    else:
        runner.display(f"Token: {mask_token(token)}")
        runner.display(f"Source: {source.provider} ({source.location})")
        if source.secure:
            runner.success("✓ Using secure storage")
        else:
            runner.display("")
            runner.warning("⚠️  WARNING: Using insecure storage")
            runner.warning("   Run 'cogo config migrate' to upgrade")

    runner.display("")
    runner.display("Environment Variables")
    runner.display("--------------------")
    for env_var in DEFAULT_ENV_VARS:
        if os.environ.get(env_var):
            runner.success(f"{env_var}: Set")
        else:
            runner.display(f"{env_var}: Not set")


@config_app.command()
def migrate(ctx: typer.Context):
    """Move your token from the plain-text ~/.cogo file into the OS keychain."""
    runner = _state(ctx).runner
    file_provider = FileProvider()
    keychain = KeychainProvider()

    if not keychain.available():
        runner.error("✗ OS keychain is not available on this system")
        runner.display("")
        runner.display("Consider using environment variables instead:")
        runner.display("  export DIGITALOCEAN_TOKEN=your_token_here")
        raise typer.Exit(code=1)

    if not file_provider.available():
        runner.warning("No config file found to migrate")
        return

    with handle_errors(runner):
        try:
            token = file_provider.get_token()
        except TokenNotFoundError:
            runner.warning("No token found in config file")
            return

        runner.display(f"Found token in file: {mask_token(token)}")
        keychain.set_token(token)
        runner.success("✓ Token successfully stored in keychain")

        if runner.confirm("Delete the token from the plain-text config file?", default=False) is True:
            try:
                file_provider.delete_token()
            except CredentialError as e:
                runner.warning(f"⚠  Failed to delete token from config file: {e}")
            else:
                runner.success("✓ Token removed from plain-text config file")
        else:
            runner.warning("⚠  Keeping plain-text config file")
            runner.display(f"  You can manually delete it at: {file_provider.location}")

    runner.display("")
    runner.success("✓ Migration complete!")
    runner.display("Your token is now stored securely in your OS keychain.")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
