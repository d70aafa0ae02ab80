class MessageBus:
    """Routes a command or query to the handler registered for its type.

    Writes and reads go through separate instances so each side can be
    wired and swapped on its own.
    """

    def __init__(self, kind: str):
        self.kind = kind
        self.handlers = {}

    def register_handler(self, message_type, handler):
        self.handlers[message_type] = handler

    def handle(self, message):
        handler = self.handlers.get(type(message))
        if handler is None:
            raise ValueError(f"No {self.kind} handler registered for {type(message).__name__}")
        return handler.handle(message)


command_bus = MessageBus("command")
query_bus = MessageBus("query")
