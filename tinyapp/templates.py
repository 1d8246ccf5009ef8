BASE_HTML = """<!doctype html><html lang=en><head><meta charset=utf-8><meta name=viewport content="width=device-width, initial-scale=1"><title>{{ title or 'TinyApp' }}</title><script src="https://cdn.tailwindcss.com"></script><style>body{font-family:Inter,system-ui,-apple-system,Segoe UI,Roboto,sans-serif}</style></head><body class="bg-slate-50 text-slate-900"><div class="max-w-4xl mx-auto p-6"><div class="flex items-center justify-between mb-6"><h1 class="text-2xl font-bold"><a href="{{ url_for('tinyapp.home') }}">TinyApp</a></h1><div class="flex gap-4 items-center text-sm">{% if user %}<a href="{{ url_for('tinyapp.urls_index') }}">My URLs</a><a href="{{ url_for('tinyapp.urls_new') }}">Create New URL</a><span class=text-slate-500>{{ user.email }}</span><form method=post action="{{ url_for('tinyapp.logout') }}"><button class="text-slate-500 hover:text-slate-800">Log out</button></form>{% else %}<a href="{{ url_for('tinyapp.login_form') }}">Log in</a><a href="{{ url_for('tinyapp.register_form') }}">Register</a>{% endif %}</div></div>{% with messages = get_flashed_messages(with_categories=true) %}{% if messages %}<div class="space-y-2 mb-4">{% for category, message in messages %}<div class="p-3 rounded-lg text-sm {{ 'bg-emerald-100 text-emerald-900' if category=='success' else 'bg-rose-100 text-rose-900' }}">{{ message }}</div>{% endfor %}</div>{% endif %}{% endwith %}{% if err %}<div class="p-3 mb-4 rounded-lg text-sm bg-rose-100 text-rose-900">{{ err }}</div>{% endif %}{% block content %}{% endblock %}<p class="mt-10 text-xs text-slate-400">&copy; {{ year }} TinyApp</p></div></body></html>"""

HOME_HTML = """{% extends 'base.html' %}{% block content %}<div class="bg-white rounded-2xl shadow p-6"><h2 class="text-lg font-semibold mb-2">{{ heading or 'Welcome to TinyApp' }}</h2>{% if not err %}<p class=text-slate-600>Shorten links, share them, and see who follows them.</p>{% endif %}</div>{% endblock %}"""

ACCOUNTS_HTML = """{% extends 'base.html' %}{% block content %}<div class="bg-white rounded-2xl shadow p-6"><h2 class="text-lg font-semibold mb-4">{{ 'Register' if action == 'register' else 'Log in' }}</h2><form method=post action="{{ url_for('tinyapp.register' if action == 'register' else 'tinyapp.login') }}" class=space-y-4><label class="block text-sm mb-1" for=email>Email</label><input id=email name=email type=email required class="w-full rounded-xl border p-2"><label class="block text-sm mb-1" for=password>Password</label><input id=password name=password type=password required class="w-full rounded-xl border p-2"><button class="rounded-xl px-4 py-2 bg-slate-900 text-white mt-2">{{ 'Register' if action == 'register' else 'Sign in' }}</button></form></div>{% endblock %}"""

URLS_INDEX_HTML = """{% extends 'base.html' %}{% block content %}<div class="bg-white rounded-2xl shadow p-6"><h2 class="text-lg font-semibold mb-4">My URLs</h2>{% if urls %}<div class=overflow-x-auto><table class="min-w-full text-sm"><thead><tr class="text-left text-slate-500"><th>Short</th><th>Destination</th><th>Views</th><th>Unique</th><th>Created</th><th>Actions</th></tr></thead><tbody>{% for code, link in urls.items() %}<tr class=border-t><td><a class=text-sky-700 href="{{ url_for('tinyapp.follow', code=code) }}" target=_blank>/u/{{ code }}</a></td><td class="max-w-[420px] truncate"><a href="{{ link.destination_url }}" target=_blank>{{ link.destination_url }}</a></td><td>{{ link.total_views }}</td><td>{{ link.unique_views }}</td><td>{{ link.created_at.strftime('%Y-%m-%d %H:%M') }}</td><td class="flex gap-2"><a class="rounded-lg px-3 py-1 bg-slate-200" href="{{ url_for('tinyapp.urls_show', code=code) }}">Edit</a><form method=post action="{{ url_for('tinyapp.urls_delete', code=code) }}" onsubmit="return confirm('Delete /u/{{ code }}?');"><button class="rounded-lg px-3 py-1 bg-rose-600 text-white">Delete</button></form></td></tr>{% endfor %}</tbody></table></div>{% else %}<p class=text-slate-500>No links yet.</p>{% endif %}</div>{% endblock %}"""

URLS_NEW_HTML = """{% extends 'base.html' %}{% block content %}<div class="bg-white rounded-2xl shadow p-6"><h2 class="text-lg font-semibold mb-4">Create a Short Link</h2><form method=post action="{{ url_for('tinyapp.urls_create') }}" class="flex gap-3"><input name=longURL type=text required placeholder="http://example.com/page" class="w-full rounded-xl border p-2"><button class="rounded-xl px-4 py-2 bg-emerald-600 text-white">Submit</button></form></div>{% endblock %}"""

URLS_SHOW_HTML = """{% extends 'base.html' %}{% block content %}<div class="bg-white rounded-2xl shadow p-6"><h2 class="text-lg font-semibold mb-2"><a class=text-sky-700 href="{{ url_for('tinyapp.follow', code=link.code, _external=True) }}">{{ url_for('tinyapp.follow', code=link.code, _external=True) }}</a></h2><p class="text-sm text-slate-600 mb-4">&rarr; {{ link.destination_url }}<br>Created {{ link.created_at.strftime('%Y-%m-%d %H:%M') }} &middot; {{ link.total_views }} views &middot; {{ link.unique_views }} unique</p><form method=post action="{{ url_for('tinyapp.urls_update', code=link.code) }}" class="flex gap-3"><input name=longURL type=text required value="{{ link.destination_url }}" class="w-full rounded-xl border p-2"><button class="rounded-xl px-4 py-2 bg-slate-900 text-white">Update</button></form></div><div class="bg-white rounded-2xl shadow p-6 mt-6"><h2 class="text-lg font-semibold mb-4">Visitors</h2>{% if visitors %}<table class="min-w-full text-sm"><thead><tr class="text-left text-slate-500"><th>Visitor</th><th>First visit</th></tr></thead><tbody>{% for v in visitors %}<tr class=border-t><td>{{ v.id }}</td><td>{{ v.visited_at.strftime('%Y-%m-%d %H:%M:%S') }}</td></tr>{% endfor %}</tbody></table>{% else %}<p class=text-slate-500>No visitors yet.</p>{% endif %}</div>{% endblock %}"""

TEMPLATES = {
    "base.html": BASE_HTML,
    "home.html": HOME_HTML,
    "accounts.html": ACCOUNTS_HTML,
    "urls_index.html": URLS_INDEX_HTML,
    "urls_new.html": URLS_NEW_HTML,
    "urls_show.html": URLS_SHOW_HTML,
}
