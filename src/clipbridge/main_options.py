"""Click option class for flags that cannot be combined."""
import click


class ExclusiveFlag(click.Option):
    """Click option that refuses to be combined with the listed options.

    Pass ``excludes=["other"]`` alongside the usual option arguments.
    """

    def __init__(self, *args, **kwargs):
        self.excludes: list[str] = kwargs.pop("excludes", [])
        super().__init__(*args, **kwargs)

    def handle_parse_result(self, ctx, opts, args):
        """Raise a usage error if this option and an excluded one were both given."""
        if self.name in opts:
            for other in self.excludes:
                if other in opts:
                    raise click.UsageError(
                        f"Options --{self.name} and --{other} are mutually exclusive",
                        ctx=ctx,
                    )
        return super().handle_parse_result(ctx, opts, args)
