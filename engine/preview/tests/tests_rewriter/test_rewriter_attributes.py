"""
Barq Preview Rewriter -- Attribute Tests

React attribute spellings become HTML ones, static values survive, and
everything that only means something at runtime (handlers, refs, keys,
spreads, dynamic values) is removed. Style objects become CSS strings.

Reference: rewriter.py (ATTRIBUTE_NAMES, DROPPED_ATTRIBUTES, style_to_css)
"""

from engine.preview.rewriter import rewrite_component, style_to_css

# ============================================================================
# Helpers
# ============================================================================


def component(markup):
    return f"const Widget = () => (\n  {markup}\n);\n\nexport default Widget;\n"


# ============================================================================
# Renames
# ============================================================================


class TestAttributeRenames:
    def test_class_name_becomes_class(self):
        html = rewrite_component(component('<div className="container mx-auto">x</div>'))
        assert html == '<div class="container mx-auto">x</div>'

    def test_every_class_name_renamed(self):
        html = rewrite_component(component('<div className="a"><span className="b">x</span></div>'))

        assert "className" not in html
        assert html.count('class="') == 2

    def test_html_for_becomes_for(self):
        html = rewrite_component(component('<label htmlFor="email">البريد</label>'))
        assert html == '<label for="email">البريد</label>'

    def test_class_name_template_literal(self):
        """Interpolations are dropped and the remaining class list is tidied."""
        html = rewrite_component(component('<a className={`btn ${active ? "on" : ""} large`}>x</a>'))
        assert html == '<a class="btn large">x</a>'

    def test_class_name_string_expression(self):
        html = rewrite_component(component("<p className={'lead'}>x</p>"))
        assert html == '<p class="lead">x</p>'

    def test_dynamic_class_name_dropped(self):
        html = rewrite_component(component("<p className={styles.lead}>x</p>"))
        assert html == "<p>x</p>"


# ============================================================================
# Removed attributes
# ============================================================================


class TestRemovedAttributes:
    def test_inline_event_handler_removed(self):
        html = rewrite_component(component('<button onClick={() => setOpen(!open)} className="btn">Go</button>'))
        assert html == '<button class="btn">Go</button>'

    def test_multiline_handler_with_nested_braces_removed(self):
        markup = (
            "<form onSubmit={(e) => {\n"
            "    e.preventDefault();\n"
            "    send({ name });\n"
            '  }} className="form">\n'
            "  <button>إرسال</button>\n"
            "</form>"
        )
        html = rewrite_component(component(markup))

        assert html.startswith('<form class="form">')
        assert "preventDefault" not in html
        assert "<button>إرسال</button>" in html

    def test_handler_reference_removed(self):
        html = rewrite_component(component("<input onChange={handleChange} />"))
        assert html == "<input />"

    def test_ref_and_key_removed(self):
        html = rewrite_component(component('<div ref={sectionRef} key="hero" id="hero">x</div>'))
        assert html == '<div id="hero">x</div>'

    def test_spread_removed(self):
        html = rewrite_component(component('<div {...props} id="x">y</div>'))
        assert html == '<div id="x">y</div>'

    def test_dynamic_src_removed(self):
        html = rewrite_component(component('<img src={logo} alt="Logo" />'))
        assert html == '<img alt="Logo" />'

    def test_false_removes_boolean_attribute(self):
        html = rewrite_component(component("<input hidden={false} />"))
        assert html == "<input />"


# ============================================================================
# Kept attributes
# ============================================================================


class TestKeptAttributes:
    def test_bare_boolean_attribute_kept(self):
        html = rewrite_component(component('<input type="checkbox" disabled />'))
        assert html == '<input type="checkbox" disabled />'

    def test_true_becomes_bare_attribute(self):
        html = rewrite_component(component("<input required={true} />"))
        assert html == "<input required />"

    def test_string_expression_unwrapped(self):
        html = rewrite_component(component('<a href={"/about"}>من نحن</a>'))
        assert html == '<a href="/about">من نحن</a>'

    def test_single_quotes_preserved(self):
        html = rewrite_component(component("<img alt='شعار' />"))
        assert html == "<img alt='شعار' />"

    def test_aria_and_data_attributes_kept(self):
        html = rewrite_component(component('<nav aria-label="main" data-section="top">x</nav>'))
        assert html == '<nav aria-label="main" data-section="top">x</nav>'

    def test_quote_in_expression_value_escaped(self):
        html = rewrite_component(component("<div title={'say \"hi\"'}>x</div>"))
        assert html == '<div title="say &quot;hi&quot;">x</div>'


# ============================================================================
# Style objects
# ============================================================================


class TestStyleObjects:
    def test_style_object_to_css(self):
        html = rewrite_component(component("<div style={{ backgroundColor: 'red', fontSize: 12 }}>x</div>"))
        assert html == '<div style="background-color: red; font-size: 12">x</div>'

    def test_dynamic_style_values_dropped(self):
        html = rewrite_component(component("<div style={{ color: theme.primary, marginTop: '8px' }}>x</div>"))
        assert html == '<div style="margin-top: 8px">x</div>'

    def test_style_reference_dropped(self):
        html = rewrite_component(component("<div style={styles.hero}>x</div>"))
        assert html == "<div>x</div>"

    def test_style_to_css_quoted_keys(self):
        assert style_to_css("{ 'font-weight': 700, \"lineHeight\": '1.5' }") == "font-weight: 700; line-height: 1.5"

    def test_style_to_css_nested_values(self):
        """Commas inside a value do not split declarations."""
        css = style_to_css("{ fontFamily: 'Cairo, sans-serif', boxShadow: shadow(1, 2) }")
        assert css == "font-family: Cairo, sans-serif"

    def test_style_to_css_template_value(self):
        assert style_to_css("{ width: `100%` }") == "width: 100%"
        assert style_to_css("{ width: `${w}px` }") is None

    def test_style_to_css_not_an_object(self):
        assert style_to_css("styles.hero") is None
        assert style_to_css("{}") is None

    def test_style_to_css_trailing_comma(self):
        assert style_to_css("{ color: 'red', }") == "color: red"
