"""Table of known Gobath API endpoints.

Maps dotted endpoint names to the segment tuples the dispatcher takes.
Kept in sync with the API schema by hand.
"""

ENDPOINTS: dict[str, tuple[str, ...]] = {
    # Auth
    "Auth.MagickLink.GET": ("Auth", "MagickLink", "GET"),
    "Auth.Password.POST": ("Auth", "Password", "POST"),
    "Auth.Telegram.POST": ("Auth", "Telegram", "POST"),
    "Auth.Google.GET": ("Auth", "Google", "GET"),
    "Auth.Yandex.GET": ("Auth", "Yandex", "GET"),
    "Auth.Vkontakte.GET": ("Auth", "Vkontakte", "GET"),
    "Auth.Logout.GET": ("Auth", "Logout", "GET"),
    # Confirmation
    "Confirmation.EmailChangeAccess.Email.GET": ("Confirmation", "EmailChangeAccess", "Email", "GET"),
    "Confirmation.EmailChangeAccess.Phone.GET": ("Confirmation", "EmailChangeAccess", "Phone", "GET"),
    "Confirmation.PhoneChangeAccess.Email.GET": ("Confirmation", "PhoneChangeAccess", "Email", "GET"),
    "Confirmation.PhoneChangeAccess.Phone.GET": ("Confirmation", "PhoneChangeAccess", "Phone", "GET"),
    "Confirmation.ProfileDeleteAccess.Email.GET": ("Confirmation", "ProfileDeleteAccess", "Email", "GET"),
    "Confirmation.ProfileDeleteAccess.Phone.GET": ("Confirmation", "ProfileDeleteAccess", "Phone", "GET"),
    "Confirmation.ProfileEmail.Email.GET": ("Confirmation", "ProfileEmail", "Email", "GET"),
    "Confirmation.ProfilePhone.Phone.GET": ("Confirmation", "ProfilePhone", "Phone", "GET"),
    "Confirmation.VerifyCode.GET": ("Confirmation", "VerifyCode", "GET"),
    # Profile
    "Profile.GET": ("Profile", "GET"),
    "Profile.PATCH": ("Profile", "PATCH"),
    "Profile.DELETE": ("Profile", "DELETE"),
    "Profile.Avatar.GET": ("Profile", "Avatar", "GET"),
    "Profile.Avatar.PATCH": ("Profile", "Avatar", "PATCH"),
    "Profile.Password.PATCH": ("Profile", "Password", "PATCH"),
    "Profile.Phone.PATCH": ("Profile", "Phone", "PATCH"),
    "Profile.Email.PATCH": ("Profile", "Email", "PATCH"),
    "Profile.Sso.Yandex.LINK": ("Profile", "Sso", "Yandex", "LINK"),
    "Profile.Sso.Yandex.UNLINK": ("Profile", "Sso", "Yandex", "UNLINK"),
    # Files
    "Upload.POST": ("Upload", "POST"),
}


def endpoint_segments(name: str) -> tuple[str, ...]:
    """Look up the segments of a named endpoint.

    Raises:
        KeyError: If the endpoint is not in the table.
    """
    try:
        return ENDPOINTS[name]
    except KeyError:
        raise KeyError(f"Unknown Gobath endpoint: {name!r}") from None


def file_segments(file_id: str) -> tuple[str, ...]:
    """Segments for ``File/<file_id>`` GET. The id is translated like any other segment."""
    return ("File", file_id, "GET")
