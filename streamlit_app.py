import asyncio
import logging

import streamlit as st

from profile_studio import config
from profile_studio.client import BackendClient, BackendError
from profile_studio.schemas import Section, Status, View
from profile_studio.state import ProfileSession
from profile_studio.views import (
    NAV_ITEMS,
    REGEN_PRESETS,
    analyze_button_label,
    date_range,
    education_line,
    enhance_button_label,
    profile_badges,
    profile_link,
    status_label,
)

logging.basicConfig(level=config.LOG_LEVEL)

# Page config
st.set_page_config(page_title='Profile Studio', page_icon=':material/rocket_launch:', layout='centered')

# NOTE: API_BASE can be overridden from .streamlit/secrets.toml
if 'session' not in st.session_state:
    client = BackendClient(st.secrets.get('API_BASE', config.API_BASE))
    st.session_state['client'] = client
    st.session_state['session'] = ProfileSession(scraper=client, optimizer=client)

session: ProfileSession = st.session_state['session']


def run(coro):
    """Drive one async transition to completion inside this script run."""
    asyncio.run(coro)
    st.rerun()


def show_notice():
    if session.notice:
        st.toast(session.notice, icon=':material/error:')
        session.dismiss_notice()


def render_navigation():
    with st.sidebar:
        if not session.nav_open:
            if st.button('Menu', icon=':material/menu:'):
                session.open_navigation()
                st.rerun()
            return

        d = session.state.data
        col1, col2 = st.columns([1, 3])
        with col1:
            st.image(d.profile_image if d else config.PLACEHOLDER_IMAGE, width=48)
        with col2:
            st.markdown(f"**{d.display_name if d else 'User'}**")

        for view, icon, label in NAV_ITEMS:
            active = session.state.view is view
            if st.button(label, icon=icon, key=f'nav-{view.value}', width='stretch',
                         type='primary' if active else 'secondary'):
                session.navigate(view)
                st.rerun()

        st.divider()
        if st.button('Settings', icon=':material/settings:', width='stretch'):
            session.navigate(View.SETTINGS)
            st.rerun()
        if st.button('Close', icon=':material/close:', width='stretch'):
            session.close_navigation()
            st.rerun()


def render_onboarding():
    st.markdown('## Crack the **LinkedIn Game**')
    st.caption('AI-powered insights to transform your profile into a high-converting landing page.')

    with st.form('analyze'):
        url = st.text_input('Your LinkedIn Profile URL', placeholder='linkedin.com/in/username')
        st.caption(':material/lock: Your data is secure. We never post on your behalf.')
        if session.state.status is Status.ERROR:
            st.error(status_label(session.state))
        submitted = st.form_submit_button(
            analyze_button_label(session.state),
            disabled=session.state.status is Status.SCRAPING,
            type='primary',
            width='stretch',
        )

    if submitted:
        with st.spinner('Fetching complete profile data...'):
            run(session.submit(url))


def render_profile_view():
    d = session.state.data
    if d is None:
        st.info('No profile loaded yet.')
        return

    top = st.columns([4, 1])
    top[0].subheader('Extracted Profile')
    if top[1].button('Back', icon=':material/logout:'):
        session.return_to_onboarding()
        st.rerun()

    if d.cover_image:
        st.image(d.cover_image, width='stretch')

    col1, col2 = st.columns([1, 3])
    with col1:
        st.image(d.profile_image, width=120)
    with col2:
        st.markdown(f"### {d.full_name}")
        st.markdown(d.headline)
        if d.current_position:
            st.caption(f":material/work: {d.current_position}")
        if d.location:
            st.caption(f":material/location_on: {d.location}")
        link = profile_link(d)
        if link:
            st.markdown(f"[View on LinkedIn]({link})")
        badges = profile_badges(d)
        if badges:
            st.caption(' · '.join(badges))

    stats = st.columns(2)
    stats[0].metric('Followers', d.follower_count)
    stats[1].metric('Connections', d.connections_count)

    if d.about:
        st.markdown('#### :material/person: About')
        st.markdown(d.about)

    if d.experience:
        st.markdown('#### :material/work: Experience')
        for exp in d.experience:
            with st.container(border=True):
                cols = st.columns([1, 6])
                if exp.logo:
                    cols[0].image(exp.logo, width=48)
                with cols[1]:
                    st.markdown(f"**{exp.title}**")
                    st.caption(exp.company)
                    st.caption(date_range(exp))
                    if exp.location:
                        st.caption(exp.location)
                if exp.description:
                    st.markdown(exp.description)

    if d.education:
        st.markdown('#### :material/school: Education')
        for edu in d.education:
            with st.container(border=True):
                cols = st.columns([1, 6])
                if edu.logo:
                    cols[0].image(edu.logo, width=48)
                with cols[1]:
                    st.markdown(f"**{edu.school}**")
                    st.caption(education_line(edu))
                    st.caption(f"{edu.start_date} — {edu.end_date}".strip(' —'))

    if d.skills:
        st.markdown('#### :material/bolt: Skills')
        st.markdown(' '.join(f'`{skill}`' for skill in d.skills))

    if d.languages:
        st.markdown('#### :material/translate: Languages')
        st.markdown(', '.join(d.languages))

    if d.featured:
        st.markdown('#### :material/star: Featured')
        cols = st.columns(min(len(d.featured), 3))
        for i, feat in enumerate(d.featured):
            with cols[i % len(cols)]:
                with st.container(border=True):
                    if feat.image:
                        st.image(feat.image, width='stretch')
                    st.markdown(f"**{feat.title}**")
                    if feat.url:
                        st.markdown(f"[View Resource]({feat.url})")

    if session.state.status is Status.ERROR:
        st.error(status_label(session.state))

    if st.button(enhance_button_label(session.state), icon=':material/auto_awesome:', type='primary',
                 width='stretch', disabled=session.state.status is Status.ANALYZING):
        with st.spinner('Optimizing strategy...'):
            run(session.enhance())


def _regen_button(section: Section, key: str):
    if st.button('Regenerate', icon=':material/autorenew:', key=key):
        with st.spinner('Rewriting...'):
            run(session.regenerate_section(section, REGEN_PRESETS[section]))


def render_ai_optimizer():
    o = session.state.optimized
    st.subheader('AI Profile Optimizer')
    if o is None:
        st.info('Run "Enhance Your Profile with AI" from the profile view first.')
        return

    st.markdown('##### Headline')
    with st.container(border=True):
        st.markdown(f"**{o.headline}**")
        _regen_button(Section.HEADLINE, 'regen-headline')

    st.markdown('##### About Summary')
    with st.container(border=True):
        st.markdown(o.about)
        _regen_button(Section.ABOUT, 'regen-about')

    st.markdown('##### Experience Highlights')
    with st.container(border=True):
        for bullet in o.experience_bullets:
            st.markdown(f":material/check_circle: {bullet}")
        _regen_button(Section.EXPERIENCE_BULLETS, 'regen-bullets')


def render_post_generator():
    st.subheader('AI Post Generator')
    for turn in session.chat_history:
        with st.chat_message('user' if turn.role == 'user' else 'assistant'):
            st.markdown(turn.text)

    prompt = st.chat_input('Describe what you want to share...')
    if prompt:
        session.chat_input = prompt
        with st.spinner('Drafting...'):
            run(session.send_chat_message())


def render_settings():
    st.subheader('Settings')
    client: BackendClient = st.session_state['client']
    st.markdown(f"**Backend:** `{client.api_base}`")
    try:
        health = client.health()
    except BackendError as e:
        st.error(f'Backend unreachable: {e}')
        return
    st.markdown(f"**Model:** `{health.get('model', '')}`")
    for label, key in (('Apify token', 'scraper_configured'), ('AI key', 'optimizer_configured')):
        state = 'configured' if health.get(key) else 'missing'
        st.markdown(f"**{label}:** {state}")
    st.caption('API keys live on the backend; set APIFY_API_TOKEN and GROQ_API_KEY in its environment.')


VIEWS = {
    View.ONBOARDING: render_onboarding,
    View.PROFILE_VIEW: render_profile_view,
    View.AI_OPTIMIZER: render_ai_optimizer,
    View.POST_GENERATOR: render_post_generator,
    View.SETTINGS: render_settings,
}

show_notice()
render_navigation()
VIEWS[session.state.view]()