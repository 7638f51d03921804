from sqladmin import ModelView

from linkboard.bio_page.models import Profile
from linkboard.link.models import SocialLink
from linkboard.theme.models import Theme
from linkboard.user.models import User


class UserAdmin(ModelView, model=User):
    name = "User"
    name_plural = "Users"
    icon = "fa-solid fa-user"

    column_list = [
        User.email,
        User.first_name,
        User.last_name,
        User.email_verified,
        User.is_admin,
        User.id,
        User.created_at,
        User.updated_at,
    ]
    column_searchable_list = [User.email, User.first_name, User.last_name]
    column_sortable_list = [User.email, User.is_admin, User.created_at]

    # Digests and one-time tokens never leave the database.
    column_details_exclude_list = [
        User.password_hash,
        User.email_verification_token,
        User.password_reset_token,
    ]
    form_excluded_columns = [
        User.password_hash,
        User.email_verification_token,
        User.email_verification_expires,
        User.password_reset_token,
        User.password_reset_expires,
        User.created_at,
        User.updated_at,
    ]


class ProfileAdmin(ModelView, model=Profile):
    name = "Bio page"
    name_plural = "Bio pages"
    icon = "fa-solid fa-id-card"

    column_list = [
        Profile.page_name,
        Profile.display_name,
        Profile.user_id,
        Profile.is_default,
        Profile.profile_views,
        Profile.link_clicks,
        Profile.created_at,
    ]
    column_searchable_list = [Profile.page_name, Profile.display_name, Profile.bio]
    column_sortable_list = [
        Profile.page_name,
        Profile.profile_views,
        Profile.link_clicks,
        Profile.created_at,
    ]
    # Counters and the default flag are maintained by the API.
    form_excluded_columns = [
        Profile.profile_views,
        Profile.link_clicks,
        Profile.is_default,
        Profile.created_at,
        Profile.updated_at,
    ]


class SocialLinkAdmin(ModelView, model=SocialLink):
    name = "Link"
    name_plural = "Links"
    icon = "fa-solid fa-link"

    column_list = [
        SocialLink.title,
        SocialLink.platform,
        SocialLink.url,
        SocialLink.profile_id,
        SocialLink.order,
        SocialLink.is_active,
        SocialLink.clicks,
    ]
    column_searchable_list = [SocialLink.title, SocialLink.url]
    column_sortable_list = [SocialLink.order, SocialLink.clicks]


class ThemeAdmin(ModelView, model=Theme):
    name = "Theme"
    name_plural = "Themes"
    icon = "fa-solid fa-palette"

    column_list = [Theme.name, Theme.profile_id, Theme.is_active, Theme.created_at]
    column_searchable_list = [Theme.name]
    can_create = False


ADMIN_VIEWS = [UserAdmin, ProfileAdmin, SocialLinkAdmin, ThemeAdmin]
