"""Entity matchers.

One matcher per entity kind. Each classifies a candidate token and, on
acceptance, returns the recognized token with its payload:

- url: bare domains and http(s) URLs (TLD-checked)
- email: email addresses (TLD-checked)
- phone: NANP numbers and short extensions, several per chunk
- mention: @user and @user@domain
- hashtag: #tag in any script
- extra: magnet/dweb/dat/gopher/ipfs/ipns/irc/mumble/ssb URIs, xmpp addresses

"""

from enlace.matchers.email import EmailMatcher, is_email
from enlace.matchers.extra import EXTRA_PREFIXES, ExtraSchemeMatcher, is_extra
from enlace.matchers.hashtag import HashtagMatcher, match_hashtag
from enlace.matchers.mention import MentionMatcher, match_mention
from enlace.matchers.phone import PhoneMatcher, find_phones
from enlace.matchers.protocol import Matcher
from enlace.matchers.url import UrlMatcher, classify_url, is_invalid_shape

__all__ = [
    "EXTRA_PREFIXES",
    "EmailMatcher",
    "ExtraSchemeMatcher",
    "HashtagMatcher",
    "Matcher",
    "MentionMatcher",
    "PhoneMatcher",
    "UrlMatcher",
    "classify_url",
    "find_phones",
    "is_email",
    "is_extra",
    "is_invalid_shape",
    "match_hashtag",
    "match_mention",
]
