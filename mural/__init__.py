"""mural -- scaffolding for Koa + joiql-mongo projects and their sub-apps."""

__version__ = "0.1.0"
