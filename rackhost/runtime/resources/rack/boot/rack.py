"""Pipeline builder and default error pipeline for descriptor scripts."""

require("rack/handler/servlet")


class Builder:
    """Collect `use` and `run` statements from a descriptor into one pipeline."""

    def __init__(self):
        self._middleware = []
        self._app = None

    def use(self, middleware, *args, **kwargs):
        self._middleware.append((middleware, args, kwargs))

    def run(self, app):
        self._app = app

    def to_app(self):
        if self._app is None:
            raise RuntimeError("missing run statement")
        app = self._app
        for middleware, args, kwargs in reversed(self._middleware):
            app = middleware(app, *args, **kwargs)
        return app

    @classmethod
    def parse(cls, source, filename="config.ru"):
        builder = cls()
        namespace = dict(globals())
        namespace.update(use=builder.use, run=builder.run)
        eval_script(source or "", namespace, filename)
        return builder


class ErrorsApp:
    """Default pipeline answering every request with a generic failure page."""

    BODY = (
        "<!DOCTYPE html>\n"
        "<html><head><title>Internal Server Error</title></head>\n"
        "<body><h1>Internal Server Error</h1>\n"
        "<p>The application could not process this request.</p></body></html>\n"
    )

    def __call__(self, env):
        return 500, {"Content-Type": "text/html; charset=utf-8"}, [self.BODY]
