"""Services"""

from gamesocio.services.counters import (
    add_upvote,
    average_rating,
    increment_upvote,
    submit_rating,
)
from gamesocio.services.portfolio import (
    attach_portfolio_file,
    attach_portfolio_link,
    clear_portfolio_attachment,
    create_portfolio_item,
    delete_portfolio_item,
    get_portfolio_item,
    list_portfolio_items,
    update_portfolio_item,
)
from gamesocio.services.profiles import (
    create_profile,
    get_current_user,
    get_profile,
    update_profile,
)

__all__ = [
    "add_upvote",
    "average_rating",
    "increment_upvote",
    "submit_rating",
    "attach_portfolio_file",
    "attach_portfolio_link",
    "clear_portfolio_attachment",
    "create_portfolio_item",
    "delete_portfolio_item",
    "get_portfolio_item",
    "list_portfolio_items",
    "update_portfolio_item",
    "create_profile",
    "get_current_user",
    "get_profile",
    "update_profile",
]
