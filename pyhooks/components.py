from pyhooks.core.core import component
from pyhooks.units import LIGHT, generate_id, use_hover, use_theme, use_todo_list


@component
def Theme(ctx):
    theme, toggle = use_theme(ctx)

    return {
        "tag": "div",
        "class_": theme,
        "button": "🔦" if theme == LIGHT else "💡",
        "handlers": {"toggle": toggle},
    }


@component
def HoverCard(ctx, label: str):
    is_hovering, handlers = use_hover(ctx)

    return {
        "tag": "div",
        "label": label,
        "hovering": is_hovering,
        "handlers": handlers,
    }


@component
def TodoApp(ctx, id_factory=generate_id):
    todos, input_text, handlers = use_todo_list(ctx, id_factory=id_factory)

    return {
        "tag": "div",
        "input": input_text,
        "items": [{"key": item.id, "text": item.text} for item in todos],
        "handlers": handlers,
    }


@component
def App(ctx, labels=("left", "right"), id_factory=generate_id):
    # each card is its own instance, so hover state is never shared
    cards = [
        HoverCard(key=f"hover-{pos}", label=label) for pos, label in enumerate(labels)
    ]
    return {
        "tag": "main",
        "children": [
            Theme(key="theme"),
            TodoApp(key="todos", id_factory=id_factory),
            *cards,
        ],
    }
