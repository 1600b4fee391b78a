"""Static sidebar menus for each dashboard role."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(slots=True)
class MenuItem:
    """Sidebar link shown on a role dashboard."""

    name: str
    path: str
    description: str = ""
    sub_menu: List["MenuItem"] = field(default_factory=list)


@dataclass(slots=True)
class SidebarConfig:
    role: str
    app_description: str
    main_menus: List[MenuItem]
    app_name: str = "RealSync"


SIDEBARS: dict[str, SidebarConfig] = {
    "buyer": SidebarConfig(
        role="buyer",
        app_description="Buyer Dashboard",
        main_menus=[
            MenuItem("Dashboard", "/dashboard", "Overview and activity summary"),
            MenuItem("Messages", "/chat", "Chat with agents & sellers"),
            MenuItem("Inquiries", "/inquiries", "Your inquiries and leads"),
            MenuItem("Favourites", "/favourites", "Saved & favourite properties"),
            MenuItem("Trippings", "/trippings", "Scheduled property visits"),
            MenuItem("Deals", "/deals", "Offers, deals & negotiations"),
            MenuItem("Transactions", "/transactions", "Payment & transaction history"),
        ],
    ),
    "seller": SidebarConfig(
        role="seller",
        app_description="Seller Dashboard",
        main_menus=[
            MenuItem("Dashboard", "/seller/dashboard", "Seller insights & overview"),
            MenuItem("My Properties", "/seller/properties", "Manage your property listings"),
            MenuItem("Message", "/seller/chat", "All messages for your Inquiries"),
            MenuItem("Inquiries", "/seller/inquiries", "Buyer inquiries for your listings"),
        ],
    ),
    "broker": SidebarConfig(
        role="broker",
        app_description="Broker Dashboard",
        main_menus=[
            MenuItem("Dashboard", "/broker/dashboard", "Broker activity overview"),
            MenuItem("Agent Management", "/broker/agents", "Manage agents & assignments"),
            MenuItem("Properties", "/broker/properties", "All property listings"),
            MenuItem("Inquiries", "/broker/inquiries", "All buyer inquiries"),
            MenuItem("Trippings", "/broker/trippings", "Scheduled property viewings"),
            MenuItem("Deals", "/broker/deals", "Offers & deal monitoring"),
            MenuItem("Transactions", "/broker/transactions", "Transaction & payment records"),
            MenuItem("Partners", "/broker/partners", "View & manage partners"),
        ],
    ),
    "agent": SidebarConfig(
        role="agent",
        app_description="Agent Dashboard",
        main_menus=[
            MenuItem("Dashboard", "/agents/dashboard", "Agent performance overview"),
            MenuItem("Properties", "/agents/properties", "Listed & assigned properties"),
            MenuItem("Handle Properties", "/agents/my-listings", "All Handle listings"),
            MenuItem("Inquiries", "/agents/inquiries", "Client inquiries"),
            MenuItem("Message", "/agents/chat", "All messages for your Inquiries"),
            MenuItem("Trippings", "/agents/trippings", "Property tours & schedules"),
            MenuItem("Deals", "/agents/deal", "Negotiations & deal tracking"),
            MenuItem("Transactions", "/agents/transaction", "Sales & payment overview"),
            MenuItem("Feedback", "/agents/feedback", "Customer Review"),
        ],
    ),
}
