import base64, os, requests, streamlit as st

st.set_page_config(page_title="Post or Nah", layout="centered")
st.title("Post or Nah?")

API_BASE = os.getenv("API_BASE", "http://127.0.0.1:3001")

VIBES = ["General vibe", "Aesthetic core", "Classy core", "Rizz core", "Matcha core", "Bad bih vibe"]

uploaded = st.file_uploader("Upload a photo", type=["jpg", "jpeg", "png", "webp"])
vibes = st.multiselect("Pick your vibe", VIBES, default=VIBES[:1])
check = st.button("Post or Nah?", disabled=uploaded is None)


def call_api(file, categories):
    mime = file.type or "image/jpeg"
    data_uri = f"data:{mime};base64,{base64.b64encode(file.getvalue()).decode('ascii')}"
    payload = {"imageBase64": data_uri, "category": ", ".join(categories)}
    r = requests.post(API_BASE + "/api/feedback", json=payload, timeout=60)
    if not r.ok:
        st.error(f"/api/feedback → {r.status_code}: {r.text}")
        r.raise_for_status()
    return r.json()


if uploaded and check:
    with st.spinner("Asking the bestie..."):
        data = call_api(uploaded, vibes)

    c1, c2 = st.columns([1, 1])
    c1.image(uploaded.getvalue(), use_container_width=True)
    c2.markdown(f"## {data['verdict']}")
    c2.write(data["suggestion"])
    if data.get("score") is not None:
        c2.metric("Score", f"{data['score']:.1f} / 10")
    for reason in data.get("reasons", []):
        c2.markdown(f"- {reason}")
    if data.get("degraded"):
        st.warning("The AI reviewer did not answer, this is a placeholder verdict.")
    with st.expander("Raw response"):
        st.write(data.get("raw"))
elif not uploaded:
    st.info("Upload a photo to get a verdict.")
