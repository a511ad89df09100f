import arviz as az
import click

from .arviz_utils import draws_from_inference_data
from .datatypes import FitMetadata
from .formatting import format_report, format_table
from .logger import set_level
from .summary import posterior_summary, summarize_fit


def _parse_groups(groups):
    """``NAME`` or ``NAME:LEVELS`` -> ordered {name: levels}."""
    ngrps = {}
    for entry in groups:
        name, _, levels = entry.partition(":")
        ngrps[name] = int(levels) if levels else None
    return ngrps


@click.group("mcmc_summary", help="Summaries of MCMC posterior draws")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    default=None,
    help="Logging level  [default: $MCMC_SUMMARY_LOG_LEVEL or INFO]",
)
def main(log_level):
    set_level(log_level)


@main.command("summary", help="Grouped summary of a fitted model")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--prob", type=float, default=0.95, show_default=True)
@click.option(
    "--group",
    "groups",
    multiple=True,
    help="Grouping factor, optionally with its number of levels (NAME:LEVELS)",
)
@click.option("--dpar", "dpars", multiple=True, help="Family specific parameter")
@click.option(
    "--algorithm",
    default="sampling",
    show_default=True,
    help="Algorithm that produced the draws",
)
@click.option("--digits", type=int, default=2, show_default=True)
def summary(path, prob, groups, dpars, algorithm, digits):
    draws = draws_from_inference_data(az.from_netcdf(path), algorithm=algorithm)
    metadata = FitMetadata(
        data_name=click.format_filename(path),
        ngrps=_parse_groups(groups),
        dpars=list(dpars) or None,
    )
    report = summarize_fit(draws, metadata, prob)
    click.echo(format_report(report, digits=digits))


@main.command("posterior", help="Estimates and quantiles of every parameter")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--prob",
    "probs",
    type=float,
    multiple=True,
    help="Quantile probability (repeatable)  [default: 0.025, 0.975]",
)
@click.option("--robust", is_flag=True, help="Use median and MAD")
@click.option(
    "--omit-invalid", is_flag=True, help="Drop non-finite draws before estimating"
)
@click.option(
    "--pars", multiple=True, help="Regular expression selecting parameters"
)
@click.option("--digits", type=int, default=2, show_default=True)
def posterior(path, probs, robust, omit_invalid, pars, digits):
    draws = draws_from_inference_data(az.from_netcdf(path))
    table = posterior_summary(
        draws,
        probs=probs or (0.025, 0.975),
        robust=robust,
        pars=list(pars) or None,
        omit_invalid=omit_invalid,
    )
    click.echo(format_table(table, digits=digits, no_digits=()))


if __name__ == "__main__":
    main()
