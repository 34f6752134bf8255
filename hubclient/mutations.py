import logging

logger = logging.getLogger(__name__)


class Mutation:
    """
    Run a write with lifecycle hooks.

    Order: on_mutate(variables) -> mutation_fn(variables) -> on_error(error,
    variables, context) or on_success(result, variables, context) ->
    on_settled(result, error, variables, context). The context is whatever
    on_mutate returned. Errors are re-raised after the hooks have run.
    """

    def __init__(self, mutation_fn, on_mutate=None, on_error=None, on_success=None, on_settled=None):
        self.mutation_fn = mutation_fn
        self.on_mutate = on_mutate
        self.on_error = on_error
        self.on_success = on_success
        self.on_settled = on_settled
        self.is_pending = False

    def mutate(self, variables):
        self.is_pending = True
        context = None
        result = None
        error = None
        try:
            if self.on_mutate is not None:
                context = self.on_mutate(variables)
            result = self.mutation_fn(variables)
        except Exception as exc:
            error = exc
            logger.debug("Mutation failed: %s", exc)
            if self.on_error is not None:
                self.on_error(exc, variables, context)
            raise
        else:
            if self.on_success is not None:
                self.on_success(result, variables, context)
            return result
        finally:
            self.is_pending = False
            if self.on_settled is not None:
                self.on_settled(result, error, variables, context)
